# app/crud/customer.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.crud.base import CRUDBase
from app.models.customer import Customer
from app.models.user import User
from app.schemas.customer import CustomerCreate, CustomerUpdate

class CRUDCustomer(CRUDBase[Customer, CustomerCreate, CustomerUpdate]):
    def list(self, db: Session) -> List[Customer]:
        return list(db.scalars(select(Customer).order_by(Customer.company_name)).all())

    def assign_technician(self, db: Session, customer: Customer, user: User) -> Customer:
        if user not in customer.technicians:
            customer.technicians.append(user)
            db.add(customer); db.commit(); db.refresh(customer)
        return customer

    def unassign_technician(self, db: Session, customer: Customer, user: User) -> Customer:
        if user in customer.technicians:
            customer.technicians.remove(user)
            db.add(customer); db.commit(); db.refresh(customer)
        return customer

customer_crud = CRUDCustomer(Customer)

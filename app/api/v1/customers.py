# app/api/v1/customers.py
import logging
from typing import List

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.core.errors import ConflictError, NotFoundError
from app.core.rbac import require_admin
from app.crud.customer import customer_crud
from app.crud.inspection import inspection_crud
from app.crud.user import user_crud
from app.db.session import get_db
from app.models.customer import Customer
from app.models.user import User
from app.schemas.customer import Customer as CustomerOut, CustomerCreate, CustomerUpdate
from app.schemas.token import Message

logger = logging.getLogger(__name__)

router = APIRouter()

def _get_or_404(db: Session, customer_id: int) -> Customer:
    customer = customer_crud.get(db, customer_id)
    if not customer:
        raise NotFoundError("Customer not found", code="CUSTOMER_NOT_FOUND")
    return customer

@router.get("/", response_model=List[CustomerOut])
def list_customers(db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return customer_crud.list(db)

@router.get("/{customer_id}", response_model=CustomerOut)
def get_customer(customer_id: int = Path(...), db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return _get_or_404(db, customer_id)

@router.post("/", response_model=CustomerOut, status_code=201)
def create_customer(body: CustomerCreate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    customer = customer_crud.create(db, body)
    logger.info("Customer created: %s", customer.company_name, extra={"user_id": admin.id})
    return customer

@router.put("/{customer_id}", response_model=CustomerOut)
def update_customer(
    body: CustomerUpdate,
    customer_id: int = Path(...),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    customer = _get_or_404(db, customer_id)
    customer_crud.update(db, customer, body)
    logger.info("Customer updated: %s", customer.company_name, extra={"user_id": admin.id})
    return customer

@router.delete("/{customer_id}", response_model=Message)
def delete_customer(customer_id: int = Path(...), db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    customer = _get_or_404(db, customer_id)
    if customer.robots:
        raise ConflictError("Customer still has robots assigned", code="CUSTOMER_HAS_ROBOTS")
    if inspection_crud.exists_for(db, customer_id=customer.id):
        raise ConflictError("Customer still has inspections recorded", code="CUSTOMER_HAS_INSPECTIONS")
    customer_crud.remove(db, customer.id)
    logger.info("Customer deleted: %s", customer.company_name, extra={"user_id": admin.id})
    return Message(message="Customer deleted successfully")

# --------------------------------------------------------------------------- #
# Técnicos atribuídos
# --------------------------------------------------------------------------- #

def _get_user_or_404(db: Session, user_id: int) -> User:
    user = user_crud.get(db, user_id)
    if not user:
        raise NotFoundError("User not found", code="USER_NOT_FOUND")
    return user

@router.post("/{customer_id}/technicians/{user_id}", response_model=CustomerOut)
def assign_technician(
    customer_id: int = Path(...),
    user_id: int = Path(...),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    customer = _get_or_404(db, customer_id)
    return customer_crud.assign_technician(db, customer, _get_user_or_404(db, user_id))

@router.delete("/{customer_id}/technicians/{user_id}", response_model=CustomerOut)
def unassign_technician(
    customer_id: int = Path(...),
    user_id: int = Path(...),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    customer = _get_or_404(db, customer_id)
    return customer_crud.unassign_technician(db, customer, _get_user_or_404(db, user_id))

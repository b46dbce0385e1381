# app/db/init_db.py
import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models.customer import Customer
from app.models.robot import Robot
from app.models.robot_type import RobotType
from app.models.user import User

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    {"name": "Admin User", "email": "admin@company.com", "role": "admin",
     "profile": {"phone": "(555) 123-4567", "department": "Administration"}},
    {"name": "Tech User", "email": "tech@company.com", "role": "technician",
     "profile": {"phone": "(555) 987-6543", "department": "Field Operations",
                 "certifications": ["ServiceBot Pro", "ServiceBot Elite"]}},
    {"name": "John Smith", "email": "john.smith@company.com", "role": "technician",
     "profile": {"phone": "(555) 456-7890", "department": "Field Operations",
                 "certifications": ["ServiceBot Pro"]}},
]

# frequência em dias: mensal / trimestral / semestral
DEMO_CUSTOMERS = [
    ("Acme Corporation", "John Doe", "john.doe@acme.com", "(555) 123-4567",
     ("123 Business Ave", "New York", "NY", "10001"), "premium", 30),
    ("Tech Solutions Inc", "Jane Smith", "jane.smith@techsolutions.com", "(555) 987-6543",
     ("456 Innovation Dr", "San Francisco", "CA", "94105"), "enterprise", 90),
    ("Global Industries", "Bob Wilson", "bob.wilson@globalind.com", "(555) 456-7890",
     ("789 Corporate Blvd", "Chicago", "IL", "60601"), "basic", 180),
]

DEMO_ROBOT_TYPES = [
    ("ServiceBot Standard", "Entry-level delivery robot", "1.5",
     {"battery": "4000mAh", "speed": "2.0 m/s", "payload": "8kg"}),
    ("ServiceBot Pro", "General purpose service robot", "2.1",
     {"battery": "5000mAh", "speed": "2.5 m/s", "payload": "10kg"}),
    ("ServiceBot Elite", "High capacity service robot", "3.0",
     {"battery": "7500mAh", "speed": "3.0 m/s", "payload": "15kg"}),
]

# (serial, tipo, índice do cliente, status, prédio, andar, zona, instalação)
DEMO_ROBOTS = [
    ("RBT-001", "ServiceBot Pro", 0, "active", "Main Office", "1st Floor", "Reception", date(2024, 6, 1)),
    ("RBT-002", "ServiceBot Pro", 0, "maintenance", "Main Office", "2nd Floor", "Conference Room", date(2024, 7, 15)),
    ("RBT-045", "ServiceBot Elite", 1, "active", "Tech Center", "3rd Floor", "Lab Area", date(2024, 8, 1)),
    ("RBT-023", "ServiceBot Standard", 2, "active", "Warehouse", "Ground Floor", "Storage Area", date(2024, 5, 15)),
]

MAINTENANCE_ITEMS = ["Display check", "Charging check", "Charger check", "Damage assessment", "Door tests"]

def database_status(db: Session) -> Dict[str, Any]:
    users = db.scalar(select(func.count(User.id))) or 0
    return {
        "is_initialized": users > 0,
        "counts": {
            "users": users,
            "customers": db.scalar(select(func.count(Customer.id))) or 0,
            "robots": db.scalar(select(func.count(Robot.id))) or 0,
        },
    }

def seed_demo_data(db: Session) -> Optional[Dict[str, int]]:
    """Cria usuários, clientes, tipos e robôs de demonstração.

    Só roda com a base vazia (nenhum usuário); devolve None caso contrário.
    """
    if db.scalar(select(func.count(User.id))):
        return None

    password_hash = hash_password(DEMO_PASSWORD)
    for data in DEMO_USERS:
        db.add(User(password_hash=password_hash, is_active=True, refresh_tokens=[], **data))

    customers = []
    for name, contact, email, phone, (street, city, state, zip_code), kind, freq in DEMO_CUSTOMERS:
        customer = Customer(
            company_name=name,
            contact_info={
                "primary_contact": contact, "email": email, "phone": phone,
                "address": {"street": street, "city": city, "state": state, "zip_code": zip_code, "country": "USA"},
            },
            service_agreement={"type": kind, "start_date": "2025-01-01", "end_date": "2025-12-31",
                               "maintenance_frequency": freq},
        )
        db.add(customer)
        customers.append(customer)

    types = {}
    for name, description, version, specs in DEMO_ROBOT_TYPES:
        rt = RobotType(name=name, description=description, manufacturer="Ctrl Robotics", model=version,
                       specifications=specs, maintenance_items=list(MAINTENANCE_ITEMS))
        db.add(rt)
        types[name] = rt
    db.flush()

    now = datetime.now(timezone.utc)
    for serial, type_name, idx, status, building, floor, zone, installed in DEMO_ROBOTS:
        rt = types[type_name]
        db.add(Robot(
            serial_number=serial,
            model=type_name,
            manufacturer="Ctrl Robotics",
            customer_id=customers[idx].id,
            robot_type_id=rt.id,
            specifications={
                "type": "delivery",
                "version": rt.model,
                "installation_date": installed.isoformat(),
                "warranty_expiration": installed.replace(year=installed.year + 2).isoformat(),
            },
            status=status,
            next_maintenance_date=now + timedelta(days=customers[idx].maintenance_frequency or 90),
            location={"building": building, "floor": floor, "zone": zone},
        ))

    db.commit()
    summary = {
        "users_created": len(DEMO_USERS),
        "customers_created": len(DEMO_CUSTOMERS),
        "robot_types_created": len(DEMO_ROBOT_TYPES),
        "robots_created": len(DEMO_ROBOTS),
    }
    logger.info("Demo data seeded: %s", summary)
    return summary

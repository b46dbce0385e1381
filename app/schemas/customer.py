# app/schemas/customer.py
from __future__ import annotations
from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, EmailStr, Field

class Coordinates(BaseModel):
    latitude: float
    longitude: float

class CustomerAddress(BaseModel):
    street: str
    city: str
    state: str
    zip_code: str
    country: str = "United States"
    coordinates: Optional[Coordinates] = None

class ContactInfo(BaseModel):
    primary_contact: str
    email: EmailStr
    phone: str
    address: CustomerAddress

class ServiceAgreement(BaseModel):
    type: Literal["basic", "premium", "enterprise"] = "basic"
    start_date: date
    end_date: Optional[date] = None
    maintenance_frequency: int = Field(default=90, ge=1)  # dias

class CustomerCreate(BaseModel):
    company_name: str = Field(max_length=200)
    contact_info: ContactInfo
    service_agreement: Optional[ServiceAgreement] = None
    notes: Optional[str] = Field(default=None, max_length=1000)

class CustomerUpdate(BaseModel):
    company_name: Optional[str] = Field(default=None, max_length=200)
    contact_info: Optional[ContactInfo] = None
    service_agreement: Optional[ServiceAgreement] = None
    is_active: Optional[bool] = None
    notes: Optional[str] = Field(default=None, max_length=1000)

class TechnicianRef(BaseModel):
    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}

class Customer(BaseModel):
    id: int
    company_name: str
    contact_info: dict
    service_agreement: dict
    is_active: bool
    notes: Optional[str] = None
    full_address: str
    robot_count: int
    technicians: List[TechnicianRef] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

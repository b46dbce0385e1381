# app/schemas/robot.py
from __future__ import annotations
from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator

RobotStatusName = Literal["active", "maintenance", "retired", "offline"]
Severity = Literal["low", "medium", "high", "critical"]

class Dimensions(BaseModel):
    height: Optional[float] = None
    width: Optional[float] = None
    depth: Optional[float] = None
    weight: Optional[float] = None

class TechnicalSpecs(BaseModel):
    dimensions: Optional[Dimensions] = None
    battery: Optional[dict] = None
    sensors: List[str] = Field(default_factory=list)
    connectivity: List[str] = Field(default_factory=list)
    operating_temperature: Optional[dict] = None

class RobotSpecifications(BaseModel):
    type: Literal["delivery", "cleaning", "security", "inspection"] = "delivery"
    version: Optional[str] = None
    installation_date: date
    warranty_expiration: Optional[date] = None
    technical_specs: Optional[TechnicalSpecs] = None

class RobotLocation(BaseModel):
    building: Optional[str] = None
    floor: Optional[str] = None
    zone: Optional[str] = None
    coordinates: Optional[dict] = None

class RobotCreate(BaseModel):
    serial_number: str = Field(min_length=1, max_length=80)
    model: str
    manufacturer: str = "Ctrl Robotics"
    customer_id: int
    robot_type_id: Optional[int] = None
    specifications: RobotSpecifications
    status: RobotStatusName = "active"
    next_maintenance_date: datetime
    location: Optional[RobotLocation] = None
    operational_hours: float = Field(default=0, ge=0)

    @field_validator("serial_number")
    @classmethod
    def _upper_serial(cls, v: str) -> str:
        return v.strip().upper()

class RobotUpdate(BaseModel):
    model: Optional[str] = None
    manufacturer: Optional[str] = None
    robot_type_id: Optional[int] = None
    specifications: Optional[RobotSpecifications] = None
    status: Optional[RobotStatusName] = None
    last_maintenance_date: Optional[datetime] = None
    next_maintenance_date: Optional[datetime] = None
    location: Optional[RobotLocation] = None
    operational_hours: Optional[float] = Field(default=None, ge=0)

class AlertCreate(BaseModel):
    type: Literal["maintenance_due", "battery_low", "error", "offline", "status_change"]
    message: str
    severity: Severity = "medium"

class CustomerRef(BaseModel):
    id: int
    company_name: str
    full_address: str

    model_config = {"from_attributes": True}

class Robot(BaseModel):
    id: int
    serial_number: str
    model: str
    manufacturer: str
    customer_id: int
    customer: Optional[CustomerRef] = None
    robot_type_id: Optional[int] = None
    specifications: dict
    qr_code: Optional[str] = None
    status: str
    last_maintenance_date: Optional[datetime] = None
    next_maintenance_date: datetime
    maintenance_status: str
    days_until_maintenance: Optional[int] = None
    location: dict
    operational_hours: float
    alerts: List[dict]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

# app/schemas/robot_type.py
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

class RobotTypeSpecifications(BaseModel):
    height: Optional[str] = None
    weight: Optional[str] = None
    battery: Optional[str] = None
    sensors: Optional[str] = None
    operating_temperature: Optional[str] = None
    connectivity: Optional[str] = None
    payload: Optional[str] = None
    speed: Optional[str] = None

class RobotTypeCreate(BaseModel):
    name: str = Field(max_length=100)
    description: str = Field(max_length=500)
    manufacturer: str = Field(max_length=100)
    model: str = Field(max_length=100)
    image: Optional[str] = None
    specifications: Optional[RobotTypeSpecifications] = None
    maintenance_items: List[str] = Field(default_factory=list)

class RobotTypeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    manufacturer: Optional[str] = Field(default=None, max_length=100)
    model: Optional[str] = Field(default=None, max_length=100)
    image: Optional[str] = None
    specifications: Optional[RobotTypeSpecifications] = None
    maintenance_items: Optional[List[str]] = None
    is_active: Optional[bool] = None

class RobotType(BaseModel):
    id: int
    name: str
    description: str
    manufacturer: str
    model: str
    image: str
    specifications: dict
    maintenance_items: List[str]
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

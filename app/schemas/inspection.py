# app/schemas/inspection.py
from __future__ import annotations
from datetime import date, datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

class CheckItem(BaseModel):
    status: Literal["pass", "fail", "na"]
    notes: Optional[str] = Field(default=None, max_length=500)
    photos: List[str] = Field(default_factory=list)

class DoorTest(BaseModel):
    doorNumber: int = Field(ge=1, le=4)
    isWorking: bool
    needsAttention: bool = False
    notes: Optional[str] = Field(default=None, max_length=500)
    photos: List[str] = Field(default_factory=list)

class DamageAssessment(BaseModel):
    hasDamage: bool = False
    description: Optional[str] = Field(default=None, max_length=1000)
    photos: List[str] = Field(default_factory=list)

class HardwareTests(BaseModel):
    door1: Optional[DoorTest] = None
    door2: Optional[DoorTest] = None
    door3: Optional[DoorTest] = None
    door4: Optional[DoorTest] = None

class Checklist(BaseModel):
    displayCheck: Optional[CheckItem] = None
    chargingCheck: Optional[CheckItem] = None
    chargerCheck: Optional[CheckItem] = None
    damageAssessment: Optional[DamageAssessment] = None
    hardwareTests: Optional[HardwareTests] = None

class Recommendation(BaseModel):
    priority: Literal["low", "medium", "high", "critical"] = "medium"
    description: str = Field(max_length=500)
    estimated_cost: Optional[float] = None
    target_date: Optional[date] = None

class InspectionCreate(BaseModel):
    robot_id: int
    customer_id: Optional[int] = None
    technician_id: Optional[int] = None
    start_time: Optional[datetime] = None
    checklist: Checklist = Field(default_factory=Checklist)
    summary: Optional[str] = Field(default=None, max_length=1000)
    recommendations: List[Recommendation] = Field(default_factory=list)

class InspectionUpdate(BaseModel):
    checklist: Optional[Checklist] = None
    summary: Optional[str] = Field(default=None, max_length=1000)
    overall_status: Optional[Literal["excellent", "good", "fair", "poor"]] = None
    recommendations: Optional[List[Recommendation]] = None
    next_maintenance_date: Optional[datetime] = None

class InspectionComplete(BaseModel):
    signature: Optional[str] = None
    summary: Optional[str] = Field(default=None, max_length=1000)

class InspectionCancel(BaseModel):
    reason: Optional[str] = None

class Inspection(BaseModel):
    id: int
    robot_id: int
    customer_id: int
    technician_id: int
    start_time: datetime
    end_time: Optional[datetime] = None
    status: str
    checklist: dict
    overall_status: Optional[str] = None
    issues_found: int
    photos_count: int
    duration: Optional[int] = None
    next_maintenance_date: Optional[datetime] = None
    signature: Optional[str] = None
    summary: Optional[str] = None
    recommendations: List[dict]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

class InspectionStats(BaseModel):
    total_inspections: int = 0
    completed_inspections: int = 0
    in_progress_inspections: int = 0
    average_duration: Optional[float] = None
    total_issues: int = 0
    average_issues: Optional[float] = None

# app/models/inspection.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, as_utc

CHECK_ITEMS = ("displayCheck", "chargingCheck", "chargerCheck")
DOORS = ("door1", "door2", "door3", "door4")


class InspectionStatus(str, Enum):
    in_progress = "in_progress"
    completed = "completed"
    cancelled = "cancelled"


class OverallStatus(str, Enum):
    excellent = "excellent"
    good = "good"
    fair = "fair"
    poor = "poor"


def count_photos(checklist: Dict[str, Any] | None) -> int:
    checklist = checklist or {}
    total = 0
    for key in (*CHECK_ITEMS, "damageAssessment"):
        total += len((checklist.get(key) or {}).get("photos") or [])
    doors = checklist.get("hardwareTests") or {}
    for door in DOORS:
        total += len((doors.get(door) or {}).get("photos") or [])
    return total


def count_issues(checklist: Dict[str, Any] | None) -> int:
    checklist = checklist or {}
    issues = sum(1 for key in CHECK_ITEMS if (checklist.get(key) or {}).get("status") == "fail")
    if (checklist.get("damageAssessment") or {}).get("hasDamage"):
        issues += 1
    doors = checklist.get("hardwareTests") or {}
    for door in DOORS:
        test = doors.get(door)
        if test and not test.get("isWorking"):
            issues += 1
    return issues


def grade(issues: int) -> str:
    if issues == 0:
        return OverallStatus.excellent.value
    if issues <= 2:
        return OverallStatus.good.value
    if issues <= 4:
        return OverallStatus.fair.value
    return OverallStatus.poor.value


class Inspection(Base):
    __tablename__ = "inspections"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    robot_id: Mapped[int] = mapped_column(ForeignKey("robots.id"), index=True)
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), index=True)
    technician_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
    end_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=InspectionStatus.in_progress.value, index=True)
    checklist: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)
    overall_status: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    issues_found: Mapped[int] = mapped_column(Integer, default=0)
    photos_count: Mapped[int] = mapped_column(Integer, default=0)
    duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)  # minutos
    next_maintenance_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    signature: Mapped[Optional[str]] = mapped_column(Text, nullable=True)  # base64
    summary: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    recommendations: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    robot = relationship("Robot")
    customer = relationship("Customer")
    technician = relationship("User")

    def recalculate(self) -> None:
        """Recalcula os campos derivados; chamado antes de cada gravação."""
        if self.status == InspectionStatus.completed.value and self.end_time and self.start_time:
            minutes = (as_utc(self.end_time) - as_utc(self.start_time)).total_seconds() / 60
            self.duration = round(minutes)
        self.photos_count = count_photos(self.checklist)
        self.issues_found = count_issues(self.checklist)
        if self.status == InspectionStatus.completed.value and not self.overall_status:
            self.overall_status = grade(self.issues_found)

    def complete(self, signature: Optional[str] = None, summary: Optional[str] = None,
                 next_maintenance_days: int = 90) -> None:
        now = datetime.now(timezone.utc)
        self.status = InspectionStatus.completed.value
        self.end_time = now
        if signature:
            self.signature = signature
        if summary:
            self.summary = summary
        self.next_maintenance_date = now + timedelta(days=next_maintenance_days)

    def cancel(self, reason: Optional[str] = None) -> None:
        self.status = InspectionStatus.cancelled.value
        self.end_time = datetime.now(timezone.utc)
        if reason:
            self.summary = f"Cancelled: {reason}"

    def add_recommendation(self, recommendation: Dict[str, Any]) -> None:
        self.recommendations = [*(self.recommendations or []), recommendation]

# app/models/robot.py
from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, DateTime, Float, ForeignKey, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base, as_utc

MAX_ALERTS = 50

class RobotStatus(str, Enum):
    active = "active"
    maintenance = "maintenance"
    retired = "retired"
    offline = "offline"

class Robot(Base):
    __tablename__ = "robots"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    serial_number: Mapped[str] = mapped_column(String(80), unique=True, index=True)
    model: Mapped[str] = mapped_column(String(100))
    manufacturer: Mapped[str] = mapped_column(String(100), default="Ctrl Robotics")
    customer_id: Mapped[int] = mapped_column(ForeignKey("customers.id"), index=True)
    robot_type_id: Mapped[Optional[int]] = mapped_column(ForeignKey("robot_types.id"), nullable=True)
    specifications: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)
    qr_code: Mapped[Optional[str]] = mapped_column(String(120), unique=True, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=RobotStatus.active.value, index=True)
    last_maintenance_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    next_maintenance_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    location: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)
    operational_hours: Mapped[float] = mapped_column(Float, default=0)
    alerts: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    customer = relationship("Customer", back_populates="robots")
    robot_type = relationship("RobotType")

    @property
    def days_until_maintenance(self) -> Optional[int]:
        if not self.next_maintenance_date:
            return None
        delta = as_utc(self.next_maintenance_date) - datetime.now(timezone.utc)
        return math.ceil(delta.total_seconds() / 86400)

    @property
    def maintenance_status(self) -> str:
        days = self.days_until_maintenance
        if days is None:
            return "unknown"
        if days < 0:
            return "overdue"
        if days == 0:
            return "due_today"
        if days <= 7:
            return "due_soon"
        return "scheduled"

    def add_alert(self, type_: str, message: str, severity: str = "medium") -> Dict[str, Any]:
        alert = {
            "type": type_,
            "message": message,
            "severity": severity,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "acknowledged": False,
        }
        # lista nova para o SQLAlchemy detectar a mudança na coluna JSON
        self.alerts = [*(self.alerts or []), alert][-MAX_ALERTS:]
        return alert

    def acknowledge_alert(self, index: int) -> Optional[Dict[str, Any]]:
        alerts = [dict(a) for a in (self.alerts or [])]
        if not 0 <= index < len(alerts):
            return None
        alerts[index]["acknowledged"] = True
        self.alerts = alerts
        return alerts[index]

    def generate_qr_code(self) -> str:
        # gerado uma única vez; chamadas seguintes devolvem o mesmo código
        if not self.qr_code:
            millis = int(datetime.now(timezone.utc).timestamp() * 1000)
            self.qr_code = f"CTRL-{self.serial_number}-{millis}"
        return self.qr_code

    def record_maintenance(self, frequency_days: int, when: Optional[datetime] = None) -> None:
        when = when or datetime.now(timezone.utc)
        self.last_maintenance_date = when
        self.next_maintenance_date = when + timedelta(days=frequency_days)

# app/models/customer.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, Column, DateTime, ForeignKey, String, Table, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base

customer_technicians = Table(
    "customer_technicians",
    Base.metadata,
    Column("customer_id", ForeignKey("customers.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)

class Customer(Base):
    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    company_name: Mapped[str] = mapped_column(String(200), index=True)
    contact_info: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)
    service_agreement: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    robots: Mapped[List["Robot"]] = relationship(back_populates="customer")  # noqa: F821
    technicians = relationship("User", secondary=customer_technicians, lazy="selectin")

    @property
    def maintenance_frequency(self) -> Optional[int]:
        return (self.service_agreement or {}).get("maintenance_frequency")

    @property
    def full_address(self) -> str:
        addr = (self.contact_info or {}).get("address") or {}
        return f"{addr.get('street', '')}, {addr.get('city', '')}, {addr.get('state', '')} {addr.get('zip_code', '')}".strip()

    @property
    def robot_count(self) -> int:
        return len(self.robots or [])

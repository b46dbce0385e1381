# app/models/user.py
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class UserRole(str, Enum):
    admin = "admin"
    technician = "technician"


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(160), unique=True, index=True)
    name: Mapped[str] = mapped_column(String(100))
    password_hash: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(20), default=UserRole.technician.value, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, index=True)
    profile: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict)

    # sessões ativas: [{"token": "...", "issued_at": "<iso>"}]
    refresh_tokens: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, default=list)

    last_login_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def has_refresh_token(self, token: str) -> bool:
        return any(rt.get("token") == token for rt in (self.refresh_tokens or []))

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin.value

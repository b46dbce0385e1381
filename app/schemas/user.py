# app/schemas/user.py
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, EmailStr, Field

RoleName = Literal["admin", "technician"]

class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None

class Profile(BaseModel):
    phone: Optional[str] = None
    department: Optional[str] = None
    certifications: List[str] = Field(default_factory=list)
    address: Optional[Address] = None

class UserCreate(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    name: str = Field(min_length=2, max_length=100)
    role: RoleName = "technician"
    profile: Optional[Profile] = None

class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    role: Optional[RoleName] = None
    is_active: Optional[bool] = None
    profile: Optional[Profile] = None

class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    profile: Optional[Profile] = None

class PasswordReset(BaseModel):
    new_password: Optional[str] = None

class UserOut(BaseModel):
    """Usuário sanitizado: sem hash de senha e sem lista de refresh tokens."""
    id: int
    email: str
    name: str
    role: str
    is_active: bool
    profile: Dict[str, Any] = Field(default_factory=dict)
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

class UserPage(BaseModel):
    users: List[UserOut]
    pagination: Pagination

class UserOverview(BaseModel):
    total_users: int = 0
    active_users: int = 0
    inactive_users: int = 0
    admin_users: int = 0
    technician_users: int = 0

class RoleCount(BaseModel):
    role: str
    count: int

class RecentUser(BaseModel):
    id: int
    name: str
    email: str
    role: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

class UserStats(BaseModel):
    overview: UserOverview
    role_distribution: List[RoleCount]
    recent_users: List[RecentUser]

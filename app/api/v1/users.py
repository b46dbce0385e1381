# app/api/v1/users.py
from __future__ import annotations
import logging
import math
from typing import Optional

from fastapi import APIRouter, Depends, Query, Path
from sqlalchemy.orm import Session

from app.api.deps import get_auth_service
from app.core.errors import BadRequestError, NotFoundError
from app.core.rbac import require_admin
from app.crud.user import user_crud
from app.db.session import get_db
from app.models.user import User
from app.schemas.token import Message
from app.schemas.user import PasswordReset, RoleName, UserCreate, UserOut, UserPage, UserStats, UserUpdate
from app.services.auth import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])

def _get_or_404(db: Session, user_id: int) -> User:
    user = user_crud.get(db, user_id)
    if not user:
        raise NotFoundError("User not found", code="USER_NOT_FOUND")
    return user

# --------------------------------------------------------------------------- #
# Endpoints (somente admin)
# --------------------------------------------------------------------------- #

@router.get("/", response_model=UserPage)
def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort: str = Query("-created_at"),
    search: Optional[str] = Query(None),
    role: Optional[RoleName] = Query(None),
    is_active: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    users, total = user_crud.list_filtered(
        db, page=page, limit=limit, sort=sort, search=search, role=role, is_active=is_active
    )
    return {
        "users": users,
        "pagination": {"page": page, "limit": limit, "total": total, "pages": math.ceil(total / limit)},
    }

@router.get("/stats", response_model=UserStats)
def user_stats(db: Session = Depends(get_db)):
    return user_crud.stats(db)

@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: int = Path(...), db: Session = Depends(get_db)):
    return _get_or_404(db, user_id)

@router.post("/", response_model=UserOut, status_code=201)
def create_user(body: UserCreate, db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    if user_crud.get_by_email(db, body.email):
        raise BadRequestError("User with this email already exists", code="USER_EXISTS")
    user = user_crud.create(db, body)
    logger.info("User created", extra={"user_id": user.id, "email": user.email})
    return user

@router.put("/{user_id}", response_model=UserOut)
def update_user(
    body: UserUpdate,
    user_id: int = Path(...),
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    data = body.model_dump(exclude_unset=True, exclude_none=True)
    if not data:
        raise BadRequestError("No valid fields to update", code="NO_UPDATES")
    user = _get_or_404(db, user_id)
    if user.id == admin.id and data.get("is_active") is False:
        raise BadRequestError("Cannot deactivate your own account", code="CANNOT_DEACTIVATE_SELF")
    changed = user_crud.update(db, user, data)
    logger.info("User updated: %s", ", ".join(changed), extra={"user_id": user.id})
    return user

@router.delete("/{user_id}", response_model=Message)
def delete_user(user_id: int = Path(...), db: Session = Depends(get_db), admin: User = Depends(require_admin)):
    user = _get_or_404(db, user_id)
    if user.id == admin.id:
        raise BadRequestError("Cannot delete your own account", code="CANNOT_DELETE_SELF")
    # soft delete: só desativa
    user_crud.update(db, user, {"is_active": False})
    logger.info("User deactivated", extra={"user_id": user.id})
    return Message(message="User deactivated successfully")

@router.put("/{user_id}/reset-password", response_model=Message)
def reset_password(
    body: PasswordReset,
    user_id: int = Path(...),
    db: Session = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    user = _get_or_404(db, user_id)
    auth.reset_password(user, body.new_password)
    return Message(message="Password reset successfully")

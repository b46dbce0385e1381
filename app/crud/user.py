# app/crud/user.py
"""Acesso a usuários + operações de sessão (lista de refresh tokens).

As três operações de sessão fazem read-modify-write na linha do usuário, sem
controle de concorrência otimista: duas requisições simultâneas do mesmo
usuário podem manter ou perder uma sessão a mais, sem corromper o registro.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from app.core.security import hash_password, normalize_email
from app.crud.base import CRUDBase
from app.models.user import User, UserRole
from app.schemas.user import UserCreate, UserUpdate

class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    updatable_fields = ("name", "role", "is_active", "profile")

    def create(self, db: Session, obj_in: UserCreate, extra=None) -> User:
        data = obj_in.model_dump(exclude_none=True)
        data["email"] = normalize_email(data["email"])
        data["password_hash"] = hash_password(data.pop("password"))
        if extra: data.update(extra)
        user = User(**self._prepare(data))
        db.add(user); db.commit(); db.refresh(user)
        return user

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.execute(select(User).where(User.email == normalize_email(email))).scalar_one_or_none()

    def set_password(self, db: Session, user: User, new_password: str) -> None:
        user.password_hash = hash_password(new_password)
        db.add(user); db.commit()

    def touch_last_login(self, db: Session, user: User) -> None:
        user.last_login_at = datetime.now(timezone.utc)
        db.add(user); db.commit()

    # ------------------------------------------------------------------ #
    # Sessões
    # ------------------------------------------------------------------ #
    def add_refresh_token(self, db: Session, user: User, token: str) -> None:
        entry = {"token": token, "issued_at": datetime.now(timezone.utc).isoformat()}
        # nova lista: o SQLAlchemy só detecta reatribuição em colunas JSON
        user.refresh_tokens = [*(user.refresh_tokens or []), entry]
        db.add(user); db.commit()

    def remove_refresh_token(self, db: Session, user: User, token: str) -> None:
        user.refresh_tokens = [rt for rt in (user.refresh_tokens or []) if rt.get("token") != token]
        db.add(user); db.commit()

    def clear_all_refresh_tokens(self, db: Session, user: User) -> None:
        user.refresh_tokens = []
        db.add(user); db.commit()

    # ------------------------------------------------------------------ #
    # Listagem / estatísticas (admin)
    # ------------------------------------------------------------------ #
    def list_filtered(
        self,
        db: Session,
        *,
        page: int = 1,
        limit: int = 20,
        sort: str = "-created_at",
        search: Optional[str] = None,
        role: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Tuple[List[User], int]:
        stmt = select(User)
        if search:
            like = f"%{search.lower()}%"
            stmt = stmt.where(or_(func.lower(User.name).like(like), User.email.like(like)))
        if role:
            stmt = stmt.where(User.role == role)
        if is_active is not None:
            stmt = stmt.where(User.is_active == is_active)

        total = db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        field = sort.lstrip("-+")
        column = getattr(User, field, None) if field in User.__table__.columns else None
        if column is None:
            column = User.created_at
        order = column.desc() if sort.startswith("-") else column.asc()
        rows = db.scalars(stmt.order_by(order, User.id.desc()).offset((page - 1) * limit).limit(limit)).all()
        return list(rows), total

    def stats(self, db: Session) -> Dict[str, Any]:
        def count(*where) -> int:
            return db.scalar(select(func.count(User.id)).where(*where)) or 0

        overview = {
            "total_users": count(),
            "active_users": count(User.is_active.is_(True)),
            "inactive_users": count(User.is_active.is_(False)),
            "admin_users": count(User.role == UserRole.admin.value),
            "technician_users": count(User.role == UserRole.technician.value),
        }
        roles = db.execute(select(User.role, func.count(User.id)).group_by(User.role)).all()
        recent = db.scalars(select(User).order_by(User.created_at.desc(), User.id.desc()).limit(5)).all()
        return {
            "overview": overview,
            "role_distribution": [{"role": r, "count": c} for r, c in roles],
            "recent_users": list(recent),
        }

user_crud = CRUDUser(User)

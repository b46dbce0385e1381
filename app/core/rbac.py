# app/core/rbac.py
from fastapi import Depends

from app.api.deps import get_current_user
from app.core.errors import ForbiddenError
from app.models.user import UserRole

ROLE_ADMIN = UserRole.admin.value

def require_roles(*roles: str):
    allowed = set(roles)
    def dep(user = Depends(get_current_user)):
        if user.role not in allowed:
            raise ForbiddenError("Insufficient permissions")
        return user
    return dep

require_admin = require_roles(ROLE_ADMIN)

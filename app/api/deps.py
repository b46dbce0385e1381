# app/api/deps.py
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.core.blacklist import TokenBlacklist, get_token_blacklist
from app.core.tokens import TokenService, get_token_service
from app.db.session import get_db
from app.models.user import User
from app.services.auth import AuthContext, AuthService

# ----------------------------------------------------------------------
# Serviço de autenticação por request (sessão + tokens + blacklist)
# ----------------------------------------------------------------------
def get_auth_service(
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
    blacklist: TokenBlacklist = Depends(get_token_blacklist),
) -> AuthService:
    return AuthService(db, tokens, blacklist)

# ----------------------------------------------------------------------
# Lê o Bearer do header Authorization (sem usar OAuth2PasswordBearer)
# ----------------------------------------------------------------------
def authenticate(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
    auth: AuthService = Depends(get_auth_service),
) -> AuthContext:
    ctx = auth.authenticate(authorization)
    request.state.user = ctx.user
    request.state.token = ctx.token
    return ctx

def optional_authenticate(
    request: Request,
    authorization: Optional[str] = Header(None, alias="Authorization"),
    auth: AuthService = Depends(get_auth_service),
) -> Optional[AuthContext]:
    ctx = auth.optional_authenticate(authorization)
    request.state.user = ctx.user if ctx else None
    request.state.token = ctx.token if ctx else None
    return ctx

def get_current_user(ctx: AuthContext = Depends(authenticate)) -> User:
    return ctx.user

# app/api/v1/auth.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import authenticate, get_auth_service, get_current_user
from app.core.config import settings
from app.core.errors import BadRequestError
from app.core.tokens import TokenPair
from app.crud.user import user_crud
from app.db.session import get_db
from app.models.user import User
from app.schemas.token import (
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    LogoutRequest,
    Message,
    RefreshRequest,
    RefreshResponse,
    Tokens,
)
from app.schemas.user import ProfileUpdate, UserOut
from app.services.auth import AuthContext, AuthService


router = APIRouter()

def _tokens_out(pair: TokenPair) -> Tokens:
    return Tokens(access_token=pair.access_token, refresh_token=pair.refresh_token, expires_in=settings.ACCESS_TTL)

# ---------- endpoints ----------
@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    user, pair = auth.login(body.email, body.password)
    return LoginResponse(user=UserOut.model_validate(user), tokens=_tokens_out(pair))

@router.post("/refresh", response_model=RefreshResponse)
def refresh(body: RefreshRequest, auth: AuthService = Depends(get_auth_service)):
    pair = auth.refresh(body.refresh_token)
    return RefreshResponse(tokens=_tokens_out(pair))

@router.post("/logout", response_model=Message)
def logout(
    body: LogoutRequest | None = None,
    ctx: AuthContext = Depends(authenticate),
    auth: AuthService = Depends(get_auth_service),
):
    auth.logout(ctx, body.refresh_token if body else None)
    return Message(message="Logout successful")

@router.post("/logout-all", response_model=Message)
def logout_all(ctx: AuthContext = Depends(authenticate), auth: AuthService = Depends(get_auth_service)):
    auth.logout_all(ctx)
    return Message(message="Logged out from all devices")

@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)):
    return user

@router.put("/me", response_model=UserOut)
def update_me(body: ProfileUpdate, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    # só nome e perfil; role/is_active ficam com o admin
    data = body.model_dump(exclude_unset=True, exclude_none=True)
    if not data:
        raise BadRequestError("No valid updates provided", code="NO_UPDATES")
    user_crud.update(db, user, data)
    return user

@router.put("/change-password", response_model=Message)
def change_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service),
):
    auth.change_password(user, body.current_password, body.new_password)
    return Message(message="Password changed successfully")

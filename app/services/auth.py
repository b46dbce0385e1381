# app/services/auth.py
"""Pipeline de autenticação e ciclo de vida das sessões.

``AuthService`` junta as três peças do núcleo: o ``TokenService`` (emite e
verifica JWT), a lista de refresh tokens guardada no usuário e a blacklist de
access tokens. Toda falha sobe como subclasse de ``AuthError`` e é convertida
em resposta HTTP pelos handlers de ``app.main``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from app.core.blacklist import TokenBlacklist
from app.core.errors import (
    AccountDeactivatedError,
    AuthError,
    BadRequestError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    TokenRevokedError,
    UserNotFoundError,
)
from app.core.security import MIN_PASSWORD_LENGTH, verify_and_maybe_upgrade, verify_password
from app.core.tokens import TokenPair, TokenService, build_payload
from app.crud.user import user_crud
from app.models.user import User

logger = logging.getLogger(__name__)

BEARER = "Bearer"

def extract_bearer_token(authorization: Optional[str]) -> str:
    """Exige exatamente ``Bearer <token>``: duas partes e esquema com B maiúsculo."""
    if not authorization:
        raise MissingTokenError("Access token is required")
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != BEARER or not parts[1]:
        raise MissingTokenError("Access token is required")
    return parts[1]

@dataclass
class AuthContext:
    user: User
    token: str

class AuthService:
    def __init__(self, db: Session, tokens: TokenService, blacklist: TokenBlacklist):
        self.db = db
        self.tokens = tokens
        self.blacklist = blacklist

    # ------------------------------------------------------------------ #
    # Autenticação por request
    # ------------------------------------------------------------------ #
    def _load_active_user(self, user_id) -> User:
        user = user_crud.get(self.db, user_id) if user_id is not None else None
        if not user:
            raise UserNotFoundError("User not found")
        if not user.is_active:
            raise AccountDeactivatedError("Account is deactivated")
        return user

    def authenticate(self, authorization: Optional[str]) -> AuthContext:
        token = extract_bearer_token(authorization)
        # blacklist vem antes da assinatura: token revogado nunca é decodificado
        if self.blacklist.contains(token):
            raise TokenRevokedError("Token has been revoked")
        claims = self.tokens.verify_access(token)
        user = self._load_active_user(claims.get("userId"))
        return AuthContext(user=user, token=token)

    def optional_authenticate(self, authorization: Optional[str]) -> Optional[AuthContext]:
        if not authorization:
            return None
        try:
            return self.authenticate(authorization)
        except AuthError as exc:
            logger.debug("Optional authentication skipped: %s", exc.code)
            return None

    # ------------------------------------------------------------------ #
    # Sessões
    # ------------------------------------------------------------------ #
    def _start_session(self, user: User) -> TokenPair:
        pair = self.tokens.issue_tokens(build_payload(user))
        user_crud.add_refresh_token(self.db, user, pair.refresh_token)
        return pair

    def login(self, email: str, password: str) -> Tuple[User, TokenPair]:
        user = user_crud.get_by_email(self.db, email)
        if not user:
            logger.info("Login failed: unknown email", extra={"email": email})
            raise InvalidCredentialsError("Invalid email or password")
        if not user.is_active:
            logger.info("Login refused: account deactivated", extra={"user_id": user.id, "email": user.email})
            raise AccountDeactivatedError("Account is deactivated")

        ok, new_hash = verify_and_maybe_upgrade(password, user.password_hash)
        if not ok:
            logger.info("Login failed: wrong password", extra={"user_id": user.id, "email": user.email})
            raise InvalidCredentialsError("Invalid email or password")
        if new_hash:
            user.password_hash = new_hash

        user_crud.touch_last_login(self.db, user)
        pair = self._start_session(user)
        logger.info("User logged in", extra={"user_id": user.id, "email": user.email})
        return user, pair

    def refresh(self, refresh_token: Optional[str]) -> TokenPair:
        if not refresh_token:
            raise BadRequestError("Refresh token is required", code="REFRESH_TOKEN_REQUIRED")
        claims = self.tokens.verify_refresh(refresh_token)
        user = self._load_active_user(claims.get("userId"))
        # assinatura ok mas fora da lista = sessão revogada
        if not user.has_refresh_token(refresh_token):
            logger.warning("Refresh with revoked token", extra={"user_id": user.id})
            raise InvalidTokenError("Invalid refresh token")

        pair = self.tokens.issue_tokens(build_payload(user))
        user_crud.remove_refresh_token(self.db, user, refresh_token)
        user_crud.add_refresh_token(self.db, user, pair.refresh_token)
        logger.info("Tokens refreshed", extra={"user_id": user.id})
        return pair

    def logout(self, ctx: AuthContext, refresh_token: Optional[str] = None) -> None:
        self.blacklist.add(ctx.token)
        if refresh_token:
            user_crud.remove_refresh_token(self.db, ctx.user, refresh_token)
        logger.info("User logged out", extra={"user_id": ctx.user.id})

    def logout_all(self, ctx: AuthContext) -> None:
        # só o access token atual é conhecido; os demais expiram sozinhos
        self.blacklist.add(ctx.token)
        user_crud.clear_all_refresh_tokens(self.db, ctx.user)
        logger.info("User logged out from all devices", extra={"user_id": ctx.user.id})

    # ------------------------------------------------------------------ #
    # Senha
    # ------------------------------------------------------------------ #
    def change_password(self, user: User, current_password: Optional[str], new_password: Optional[str]) -> None:
        if not current_password or not new_password:
            raise BadRequestError("Current password and new password are required", code="MISSING_PASSWORDS")
        if len(new_password) < MIN_PASSWORD_LENGTH:
            raise BadRequestError(
                f"New password must be at least {MIN_PASSWORD_LENGTH} characters long", code="PASSWORD_TOO_SHORT"
            )
        if not verify_password(current_password, user.password_hash):
            raise BadRequestError("Current password is incorrect", code="INCORRECT_PASSWORD")

        user_crud.set_password(self.db, user, new_password)
        user_crud.clear_all_refresh_tokens(self.db, user)
        logger.info("Password changed", extra={"user_id": user.id})

    def reset_password(self, user: User, new_password: Optional[str]) -> None:
        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise BadRequestError(
                f"New password must be at least {MIN_PASSWORD_LENGTH} characters long", code="INVALID_PASSWORD"
            )
        user_crud.set_password(self.db, user, new_password)
        user_crud.clear_all_refresh_tokens(self.db, user)
        logger.info("Password reset by admin", extra={"user_id": user.id})

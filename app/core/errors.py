# app/core/errors.py
"""Erros de aplicação com status HTTP e código legível por máquina.

Os handlers registrados em ``app.main`` convertem qualquer ``AppError`` em
``{"code", "message", "details"}``. Erros de autenticação (401) ainda levam o
header ``WWW-Authenticate: Bearer``.
"""
from __future__ import annotations

from typing import Any, Optional


class AppError(Exception):
    status_code: int = 400
    code: str = "BAD_REQUEST"

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None,
                 details: Any = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.details = details


class BadRequestError(AppError):
    status_code = 400
    code = "BAD_REQUEST"


class ForbiddenError(AppError):
    status_code = 403
    code = "INSUFFICIENT_PERMISSIONS"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"


# --------------------------------------------------------------------------- #
# Autenticação
# --------------------------------------------------------------------------- #

class AuthError(AppError):
    status_code = 401
    code = "UNAUTHORIZED"


class TokenError(AuthError):
    pass


class TokenExpiredError(TokenError):
    code = "TOKEN_EXPIRED"


class InvalidTokenError(TokenError):
    code = "INVALID_TOKEN"


class MalformedTokenError(TokenError):
    code = "MALFORMED_TOKEN"


class MissingTokenError(AuthError):
    code = "MISSING_TOKEN"


class TokenRevokedError(AuthError):
    code = "TOKEN_REVOKED"


class UserNotFoundError(AuthError):
    code = "USER_NOT_FOUND"


class AccountDeactivatedError(AuthError):
    code = "ACCOUNT_DEACTIVATED"


class InvalidCredentialsError(AuthError):
    code = "INVALID_CREDENTIALS"


class TokenConfigError(RuntimeError):
    """Chaves de assinatura ausentes ou inválidas: erro fatal de configuração."""

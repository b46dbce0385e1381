# app/core/tokens.py
"""Emissão e verificação de access/refresh tokens (JWT, python-jose).

Access e refresh são assinados com segredos distintos, de modo que um token de
um tipo nunca verifica como o outro. A verificação segue a ordem:
estrutura -> assinatura -> issuer/audience -> expiração.
"""
from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from jose import jwt, JWTError
from jose.exceptions import JWTClaimsError

from app.core.config import settings
from app.core.errors import (
    InvalidTokenError,
    MalformedTokenError,
    TokenConfigError,
    TokenExpiredError,
)

logger = logging.getLogger(__name__)

ACCESS = "access"
REFRESH = "refresh"

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}

def parse_duration(value: str | int | timedelta) -> timedelta:
    """Converte ``"15m"``, ``"7d"``, ``"0s"`` ou segundos inteiros em timedelta."""
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int):
        return timedelta(seconds=value)
    match = _DURATION_RE.match(value or "")
    if not match:
        raise TokenConfigError(f"Invalid token lifetime: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _UNITS[unit])

def _now() -> datetime:
    return datetime.now(timezone.utc)

@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str

def build_payload(user) -> Dict[str, Any]:
    return {
        "userId": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "isActive": bool(user.is_active),
    }

class TokenService:
    def __init__(
        self,
        *,
        access_secret: str,
        refresh_secret: str,
        access_ttl: str | int | timedelta = "15m",
        refresh_ttl: str | int | timedelta = "7d",
        issuer: str = "field-maintenance-api",
        audience: str = "field-maintenance-app",
        algorithm: str = "HS256",
    ):
        self._secrets = {ACCESS: access_secret, REFRESH: refresh_secret}
        self.access_ttl = parse_duration(access_ttl)
        self.refresh_ttl = parse_duration(refresh_ttl)
        self.issuer = issuer
        self.audience = audience
        self.algorithm = algorithm

    @classmethod
    def from_settings(cls, cfg=settings) -> "TokenService":
        return cls(
            access_secret=cfg.ACCESS_SECRET,
            refresh_secret=cfg.REFRESH_SECRET,
            access_ttl=cfg.ACCESS_TTL,
            refresh_ttl=cfg.REFRESH_TTL,
            issuer=cfg.JWT_ISSUER,
            audience=cfg.JWT_AUDIENCE,
            algorithm=cfg.JWT_ALGORITHM,
        )

    def validate(self) -> None:
        """Falha (fatal) se as chaves de assinatura estiverem ausentes ou iguais."""
        if not self._secrets[ACCESS] or not self._secrets[REFRESH]:
            raise TokenConfigError("ACCESS_SECRET and REFRESH_SECRET must be set")
        if self._secrets[ACCESS] == self._secrets[REFRESH]:
            raise TokenConfigError("ACCESS_SECRET and REFRESH_SECRET must be distinct")

    # ------------------------------------------------------------------ #
    # Emissão
    # ------------------------------------------------------------------ #
    def _sign(self, purpose: str, claims: Dict[str, Any], ttl: timedelta) -> str:
        secret = self._secrets[purpose]
        if not secret:
            raise TokenConfigError(f"Missing signing secret for {purpose} tokens")
        now = _now()
        to_encode: Dict[str, Any] = {
            **claims,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
            "jti": uuid.uuid4().hex,
        }
        try:
            return jwt.encode(to_encode, secret, algorithm=self.algorithm)
        except JWTError as exc:
            logger.error("Token signing failed for %s token: %s", purpose, exc)
            raise TokenConfigError("Token generation failed") from exc

    def issue_tokens(self, payload: Dict[str, Any]) -> TokenPair:
        access = self._sign(ACCESS, payload, self.access_ttl)
        refresh = self._sign(REFRESH, {"userId": payload.get("userId")}, self.refresh_ttl)
        return TokenPair(access_token=access, refresh_token=refresh)

    # ------------------------------------------------------------------ #
    # Verificação
    # ------------------------------------------------------------------ #
    def _verify(self, token: str, purpose: str) -> Dict[str, Any]:
        try:
            jwt.get_unverified_header(token)
            jwt.get_unverified_claims(token)
        except (JWTError, AttributeError, TypeError) as exc:
            raise MalformedTokenError(f"Malformed {purpose} token") from exc

        try:
            # expiração é checada abaixo, depois de issuer/audience
            claims = jwt.decode(
                token,
                self._secrets[purpose],
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"verify_exp": False, "require_exp": True, "require_iss": True, "require_aud": True},
            )
        except JWTClaimsError as exc:
            logger.debug("Issuer/audience mismatch on %s token: %s", purpose, exc)
            raise InvalidTokenError(f"Invalid {purpose} token") from exc
        except JWTError as exc:
            raise InvalidTokenError(f"Invalid {purpose} token") from exc

        exp = claims.get("exp")
        if not isinstance(exp, (int, float)):
            raise InvalidTokenError(f"Invalid {purpose} token")
        # exp precisa estar no futuro: TTL de 0s nunca é aceito
        if exp <= _now().timestamp():
            raise TokenExpiredError(f"{purpose.capitalize()} token expired")
        return claims

    def verify_access(self, token: str) -> Dict[str, Any]:
        return self._verify(token, ACCESS)

    def verify_refresh(self, token: str) -> Dict[str, Any]:
        return self._verify(token, REFRESH)

    @staticmethod
    def decode_unverified(token: str) -> Optional[Dict[str, Any]]:
        """Somente diagnóstico: NÃO verifica assinatura; nunca usar para autorizar."""
        try:
            return {"header": jwt.get_unverified_header(token), "payload": jwt.get_unverified_claims(token)}
        except (JWTError, AttributeError, TypeError):
            logger.debug("Could not decode token for inspection")
            return None

@lru_cache
def get_token_service() -> TokenService:
    return TokenService.from_settings(settings)

# app/core/security.py
from __future__ import annotations

from typing import Tuple

from passlib.context import CryptContext

MIN_PASSWORD_LENGTH = 6

# argon2 para hashes novos; bcrypt aceito só para verificar hashes legados
pwd_context = CryptContext(
    schemes=["argon2", "bcrypt"],
    deprecated="auto",
    argon2__time_cost=2,
    argon2__memory_cost=19456,
    argon2__parallelism=1,
)

def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)

def verify_password(plain: str, stored_hash: str) -> bool:
    if not plain or not stored_hash:
        return False
    return pwd_context.verify(plain, stored_hash)

def verify_and_maybe_upgrade(plain: str, stored_hash: str) -> Tuple[bool, str | None]:
    """Verifica a senha e, se o hash estiver com parâmetros antigos, devolve um novo."""
    if not verify_password(plain, stored_hash):
        return False, None
    if pwd_context.needs_update(stored_hash):
        return True, pwd_context.hash(plain)
    return True, None

def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()

"""Password hashing and bearer token decoding helpers."""

from __future__ import annotations

from typing import Any

from jose import jwt
from passlib.context import CryptContext

from core.config_loader import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def decode_access_token(token: str) -> dict[str, Any]:
    """Return the token claims; raises ``jose.JWTError`` when invalid or expired."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])

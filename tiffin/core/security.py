# tiffin/core/security.py
"""Password hashing and session-token signing primitives."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from tiffin.core.config import get_settings


@lru_cache()
def _pwd() -> CryptContext:
    return CryptContext(schemes=[get_settings().password_scheme], deprecated="auto")


def hash_password(p: str) -> str:
    return _pwd().hash(p)


def verify_password(p: str, h: Optional[str]) -> bool:
    # OTP-created accounts carry no digest and can never pass a password check
    if not h:
        return False
    return _pwd().verify(p, h)


def token_lifetime() -> timedelta:
    return timedelta(hours=get_settings().jwt_expire_hours)


def create_token(claims: Dict[str, Any], now: Optional[datetime] = None) -> str:
    """Sign ``claims`` with the configured secret; adds ``iat`` and ``exp``."""
    settings = get_settings()
    issued = now or datetime.now(timezone.utc)
    payload = dict(claims)
    payload["iat"] = issued
    payload["exp"] = issued + token_lifetime()
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    """Return the verified claims, or None for bad signatures and expired tokens."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None

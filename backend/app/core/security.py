"""Security utilities.

Single source of truth for:
- Password hashing
- JWT token creation/verification (access tokens carry a `type` claim)
- Opaque refresh token generation

app/services/auth.py builds the login/refresh/logout flows on top of this module.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def create_token(
    subject: str,
    token_type: str = ACCESS_TOKEN_TYPE,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed JWT with `sub`, `type`, `iat` and `exp` claims."""

    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode = {"sub": subject, "type": token_type, "iat": now, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def create_access_token(subject: str, expires_minutes: Optional[int] = None) -> str:
    minutes = expires_minutes or settings.access_token_expire_minutes
    return create_token(subject, ACCESS_TOKEN_TYPE, timedelta(minutes=minutes))


def access_token_ttl_seconds() -> int:
    return int(settings.access_token_expire_minutes) * 60


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify a JWT; returns the claims or None if invalid/expired."""

    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None


def decode_access_token_subject(token: str) -> Optional[str]:
    payload = decode_token(token)
    if not payload or payload.get("type") != ACCESS_TOKEN_TYPE:
        return None
    subject = payload.get("sub")
    return str(subject) if subject else None


def new_refresh_token_value() -> str:
    return str(uuid.uuid4())


def refresh_token_expiry() -> datetime:
    return datetime.now(timezone.utc) + timedelta(minutes=settings.refresh_token_expire_minutes)

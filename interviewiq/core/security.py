from __future__ import annotations

import secrets
from datetime import datetime, timedelta

from passlib.context import CryptContext

from interviewiq.common.time import utc_now

pwd_context: CryptContext = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a plaintext password.

    Args:
        password: plaintext password.

    Returns:
        str: passlib hash string.
    """
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Compare a plaintext password against its stored hash.

    Args:
        password: plaintext password.
        password_hash: stored hash.

    Returns:
        bool: whether they match.
    """
    return pwd_context.verify(password, password_hash)


def new_token() -> str:
    """Random bearer token (64 hex characters)."""
    return secrets.token_hex(32)


def token_expiry(ttl_minutes: int, now: datetime | None = None) -> datetime:
    """Compute a token expiry time.

    Args:
        ttl_minutes: token lifetime.
        now: reference time (defaults to utc_now).

    Returns:
        datetime: expiry in UTC.
    """
    base = now or utc_now()
    return base + timedelta(minutes=ttl_minutes)

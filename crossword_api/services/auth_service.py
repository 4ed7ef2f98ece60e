"""Bearer token handling.

Issuing tokens to end users (login, registration, guests) is handled by a
separate auth service; this module only encodes tokens for tooling and
verifies the ones presented to the API.
"""
import uuid
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from crossword_api.config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ALGORITHM,
    SECRET_KEY,
)


def create_access_token(user_id: int, expires_minutes: int | None = None) -> str:
    """Create a signed JWT access token for ``user_id``."""
    minutes = ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode = {
        "sub": str(user_id),
        "exp": expire,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> dict | None:
    """Verify and decode a JWT token.

    Returns:
        Decoded token payload or None if invalid.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        return None


def user_id_from_token(token: str) -> int | None:
    """Return the user id carried by a valid token, else None."""
    payload = verify_token(token)
    if payload is None:
        return None
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None

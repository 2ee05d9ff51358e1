"""JWT helpers for identifying the acting user."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from nicolas_qui_paie.core.settings import settings

__all__ = ["JWTError", "create_access_token", "decode_subject"]


def create_access_token(user_id: str, expires_minutes: int | None = None) -> str:
    """Return a signed bearer token whose subject is ``user_id``."""
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    expire = datetime.now(UTC) + timedelta(minutes=minutes)
    payload = {"sub": user_id, "exp": expire}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_subject(token: str) -> str | None:
    """Decode a bearer token and return its subject claim.

    Raises:
        JWTError: If the token is malformed, expired or badly signed.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    subject = payload.get("sub")
    if subject is None or not isinstance(subject, str):
        return None
    return subject

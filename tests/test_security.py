# tests/test_security.py
import pytest
from jose import jwt

from nicolas_qui_paie.core.security import JWTError, create_access_token, decode_subject
from nicolas_qui_paie.core.settings import settings


def test_token_carries_user_id() -> None:
    token = create_access_token("user-123")
    assert decode_subject(token) == "user-123"


def test_expired_token_rejected() -> None:
    token = create_access_token("user-123", expires_minutes=-1)
    with pytest.raises(JWTError):
        decode_subject(token)


def test_foreign_signature_rejected() -> None:
    token = jwt.encode({"sub": "user-123"}, "another-secret", algorithm=settings.jwt_algorithm)
    with pytest.raises(JWTError):
        decode_subject(token)


def test_token_without_subject() -> None:
    token = jwt.encode({"scope": "read"}, settings.secret_key, algorithm=settings.jwt_algorithm)
    assert decode_subject(token) is None

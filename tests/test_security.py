# mypy: ignore-errors
# tests/test_security.py
"""Tests for access token helpers."""

import pytest
from jose import jwt

from kgotla.core.security import InvalidTokenError, create_access_token, decode_access_token
from kgotla.core.settings import settings


def test_token_round_trip_keeps_subject_and_claims() -> None:
    token = create_access_token("user-1", {"email": "a@example.com"})

    payload = decode_access_token(token)

    assert payload["sub"] == "user-1"
    assert payload["email"] == "a@example.com"
    assert "exp" in payload


def test_wrong_signature_rejected() -> None:
    token = jwt.encode({"sub": "user-1"}, "another-secret", algorithm=settings.jwt_algorithm)

    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_missing_subject_rejected() -> None:
    token = jwt.encode({"email": "a@example.com"}, settings.secret_key, algorithm=settings.jwt_algorithm)

    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_expired_token_rejected() -> None:
    token = jwt.encode(
        {"sub": "user-1", "exp": 1}, settings.secret_key, algorithm=settings.jwt_algorithm
    )

    with pytest.raises(InvalidTokenError):
        decode_access_token(token)

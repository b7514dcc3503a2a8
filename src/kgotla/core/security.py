"""Bearer token helpers built on JOSE JWTs."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from kgotla.core.settings import settings


class InvalidTokenError(ValueError):
    """Raised when an access token cannot be decoded or lacks a subject."""


def create_access_token(subject: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create a signed access token whose ``sub`` claim is the user id."""
    to_encode: dict[str, object] = {"sub": subject}
    if extra_claims:
        to_encode.update(extra_claims)
    expire = datetime.now(UTC) + timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = expire
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> dict[str, object]:
    """Decode and verify an access token.

    Args:
        token: Raw JWT taken from the Authorization header.

    Returns:
        The verified claims.

    Raises:
        InvalidTokenError: If the signature, expiry or subject is invalid.
    """
    try:
        payload: dict[str, object] = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise InvalidTokenError("Token has no subject")
    return payload

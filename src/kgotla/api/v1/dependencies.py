"""Shared API dependencies for authentication and common functionality."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from kgotla.core.security import InvalidTokenError, decode_access_token
from kgotla.core.settings import settings
from kgotla.db.session import get_db
from kgotla.models import User
from kgotla.services.user_service import get_or_create_user

# HTTP Bearer scheme for JWT authentication; missing headers are reported as 401 below.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        db: Database session

    Returns:
        User object for the authenticated user, provisioned on first use

    Raises:
        HTTPException: If the header is missing or the token is invalid
    """
    if credentials is None:
        raise _unauthorized("Authentication required")
    try:
        payload = decode_access_token(credentials.credentials)
    except InvalidTokenError as err:
        raise _unauthorized("Could not validate credentials") from err

    return get_or_create_user(db, str(payload["sub"]), payload)


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


@dataclass(frozen=True)
class Page:
    """Offset pagination window."""

    limit: int
    offset: int


def get_page(
    limit: int = Query(
        settings.default_page_size,
        ge=1,
        le=settings.max_page_size,
        description="Maximum number of items to return",
    ),
    offset: int = Query(0, ge=0, description="Number of items to skip"),
) -> Page:
    """Return the requested pagination window."""
    return Page(limit=limit, offset=offset)


PageDep = Annotated[Page, Depends(get_page)]

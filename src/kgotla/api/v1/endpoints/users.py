# src/kgotla/api/v1/endpoints/users.py
"""User profile endpoints."""

from fastapi import APIRouter, HTTPException, status

from kgotla.models import User
from kgotla.schemas.user import UserResponse, UserUpdate

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUserDep) -> User:
    """Return the caller's profile."""
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_me(
    profile: UserUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> User:
    """Update the caller's editable profile fields."""
    for field, value in profile.model_dump(exclude_unset=True).items():
        setattr(current_user, field, value)
    db.commit()
    db.refresh(current_user)
    return current_user


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, db: SessionDep) -> User:
    """Return a member's public profile."""
    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user

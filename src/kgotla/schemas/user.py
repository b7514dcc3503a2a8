"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from .common import CamelModel


class UserResponse(CamelModel):
    """Public profile of a forum member."""

    id: str
    display_name: str | None
    profile_image_url: str | None
    bio: str | None
    location: str | None
    reputation: int
    created_at: datetime


class UserUpdate(CamelModel):
    """Profile fields a member may edit."""

    display_name: str | None = Field(None, min_length=1, max_length=100)
    profile_image_url: str | None = None
    bio: str | None = Field(None, max_length=1000)
    location: str | None = Field(None, max_length=100)

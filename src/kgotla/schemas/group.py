"""Group-related Pydantic schemas."""

from datetime import datetime

from pydantic import Field

from .common import CamelModel


class GroupCreate(CamelModel):
    """Schema for creating a new group."""

    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None
    is_private: bool = False
    location: str | None = Field(None, max_length=100)
    category: str | None = Field(None, max_length=50)


class GroupResponse(CamelModel):
    """Schema for group information returned by the API."""

    id: int
    name: str
    description: str | None
    is_private: bool
    location: str | None
    category: str | None
    member_count: int
    creator_id: str | None
    created_at: datetime

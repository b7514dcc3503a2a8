"""Bookmark-related Pydantic schemas."""

from datetime import datetime

from .common import CamelModel


class BookmarkCreate(CamelModel):
    """Schema for bookmarking a post."""

    post_id: int


class BookmarkResponse(CamelModel):
    """Schema for a stored bookmark."""

    id: int
    post_id: int
    created_at: datetime

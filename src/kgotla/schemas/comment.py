"""Comment-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .common import CamelModel


class CommentCreate(CamelModel):
    """Schema for creating a comment or a reply."""

    content: str = Field(..., min_length=1, max_length=5000)
    parent_id: int | None = Field(None, description="Comment being replied to")


class CommentUpdate(CamelModel):
    """Schema for editing a comment's text."""

    content: str = Field(..., min_length=1, max_length=5000)


class CommentResponse(CamelModel):
    """Schema for a single comment."""

    id: int
    post_id: int
    author_id: str | None
    parent_id: int | None
    content: str
    upvote_count: int
    downvote_count: int
    created_at: datetime
    updated_at: datetime


class CommentNode(CommentResponse):
    """Comment with its replies nested beneath it."""

    replies: list[CommentNode] = Field(default_factory=list)

"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator, model_validator

from .common import CamelModel

PostTypeLiteral = Literal["text", "image", "poll", "question", "link"]


class PostCreate(CamelModel):
    """Schema for creating a new post."""

    type: PostTypeLiteral = Field("text", description="Kind of post")
    title: str | None = Field(None, max_length=200)
    content: str = Field(..., min_length=1, max_length=10000)
    image_url: str | None = None
    link_url: str | None = None
    poll_options: list[str] | None = Field(None, description="Choices for poll posts")
    tags: list[str] | None = None
    is_anonymous: bool = False
    allow_comments: bool = True
    group_id: int | None = Field(None, description="Group the post is shared in")

    @model_validator(mode="after")
    def _check_poll_options(self) -> "PostCreate":
        if self.type == "poll" and not self.poll_options:
            raise ValueError("Poll posts require at least one option")
        return self


class PostUpdate(CamelModel):
    """Fields an author may edit after publishing.

    Vote and comment counters are not editable.
    """

    title: str | None = Field(None, max_length=200)
    content: str | None = Field(None, min_length=1, max_length=10000)
    image_url: str | None = None
    link_url: str | None = None
    tags: list[str] | None = None
    allow_comments: bool | None = None

    @field_validator("content", "allow_comments")
    @classmethod
    def _reject_null(cls, value: object) -> object:
        # Omit the field to leave it unchanged; the columns are NOT NULL.
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class PostResponse(CamelModel):
    """Schema for post information returned by the API."""

    id: int
    author_id: str | None
    group_id: int | None
    type: str
    title: str | None
    content: str
    image_url: str | None
    link_url: str | None
    poll_options: list[str] | None
    tags: list[str] | None
    is_anonymous: bool
    allow_comments: bool
    upvote_count: int
    downvote_count: int
    comment_count: int
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def _hide_anonymous_author(cls, data: object) -> object:
        if not isinstance(data, dict):
            extracted: dict[str, object | None] = {}
            for field_name in cls.model_fields:
                extracted[field_name] = getattr(data, field_name, None)
            data = extracted

        if data.get("is_anonymous") or data.get("isAnonymous"):
            data["author_id"] = None
            data.pop("authorId", None)
        return data

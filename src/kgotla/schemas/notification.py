"""Notification-related Pydantic schemas."""

from datetime import datetime

from .common import CamelModel


class NotificationResponse(CamelModel):
    """Schema for notifications returned to their recipient."""

    id: int
    type: str
    title: str | None
    content: str | None
    related_post_id: int | None
    related_comment_id: int | None
    related_user_id: str | None
    is_read: bool
    created_at: datetime

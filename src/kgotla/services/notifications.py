"""Helpers that fan out notifications for activity on a user's content."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from kgotla.models import Comment, Notification, Post
from kgotla.models.notification import NOTIFICATION_TYPE_COMMENT, NOTIFICATION_TYPE_REPLY

logger = logging.getLogger(__name__)

_PREVIEW_LENGTH = 140


def _preview(text: str) -> str:
    if len(text) <= _PREVIEW_LENGTH:
        return text
    return text[: _PREVIEW_LENGTH - 1].rstrip() + "…"


def notify_new_comment(
    db: Session,
    *,
    post: Post,
    comment: Comment,
    parent: Comment | None = None,
) -> list[Notification]:
    """Queue notifications for a new comment without committing.

    The post author hears about every comment; the parent comment's author
    additionally hears about replies. Nobody is notified about their own
    comment and nobody receives two notifications for the same comment.
    """
    commenter_id = comment.author_id
    recipients: dict[str, str] = {}
    if parent is not None and parent.author_id and parent.author_id != commenter_id:
        recipients[parent.author_id] = NOTIFICATION_TYPE_REPLY
    if post.author_id and post.author_id != commenter_id:
        recipients.setdefault(post.author_id, NOTIFICATION_TYPE_COMMENT)

    created: list[Notification] = []
    for user_id, kind in recipients.items():
        title = "New reply to your comment" if kind == NOTIFICATION_TYPE_REPLY else (
            "New comment on your post"
        )
        notification = Notification(
            user_id=user_id,
            type=kind,
            title=title,
            content=_preview(comment.content),
            related_post_id=post.id,
            related_comment_id=comment.id,
            related_user_id=commenter_id,
        )
        db.add(notification)
        created.append(notification)

    logger.debug("Queued %d notifications for comment %s", len(created), comment.id)
    return created

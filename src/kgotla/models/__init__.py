# src/kgotla/models/__init__.py
"""SQLAlchemy models for the Kgotla application."""

from .bookmark import Bookmark
from .comment import Comment
from .group import Group, GroupMember
from .notification import Notification
from .post import Post
from .user import User
from .vote import Vote

__all__ = [
    "Bookmark",
    "Comment",
    "Group", "GroupMember",
    "Notification",
    "Post",
    "User",
    "Vote",
]

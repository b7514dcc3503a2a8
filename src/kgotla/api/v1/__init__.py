# src/kgotla/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    bookmarks_router,
    comments_router,
    groups_router,
    notifications_router,
    posts_router,
    users_router,
    votes_router,
)

__all__ = [
    "bookmarks_router",
    "comments_router",
    "groups_router",
    "notifications_router",
    "posts_router",
    "users_router",
    "votes_router",
]

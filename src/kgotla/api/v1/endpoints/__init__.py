# src/kgotla/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .bookmarks import router as bookmarks_router
from .comments import router as comments_router
from .groups import router as groups_router
from .notifications import router as notifications_router
from .posts import router as posts_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "bookmarks_router",
    "comments_router",
    "groups_router",
    "notifications_router",
    "posts_router",
    "users_router",
    "votes_router",
]

"""Database engine, sessions and time helpers."""

from .session import Base, SessionLocal, engine, get_db
from .time import utc_isoformat, utcnow

__all__ = ["Base", "SessionLocal", "engine", "get_db", "utc_isoformat", "utcnow"]

# src/kgotla/models/vote.py
"""Models capturing voting interactions on posts and comments."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from kgotla.db.session import Base
from kgotla.db.time import utcnow

VOTE_DIRECTION_UP = "up"
VOTE_DIRECTION_DOWN = "down"
VOTE_DIRECTIONS = (VOTE_DIRECTION_UP, VOTE_DIRECTION_DOWN)

TARGET_TYPE_POST = "post"
TARGET_TYPE_COMMENT = "comment"


class Vote(Base):
    """Per-user vote on a post or comment.

    A voter holds a single slot per target: the row is created on the
    first vote, flipped in place on an opposite vote and deleted when the
    same direction is cast again.
    """

    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("voter_id", "target_type", "target_id", name="uq_votes_voter_target"),
        CheckConstraint("direction IN ('up', 'down')", name="ck_votes_direction"),
        CheckConstraint("target_type IN ('post', 'comment')", name="ck_votes_target_type"),
        Index("ix_votes_target", "target_type", "target_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    voter_id: Mapped[str] = mapped_column(
        String(128),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    target_type: Mapped[str] = mapped_column(String(16), nullable=False)
    # Polymorphic reference into posts.id or comments.id depending on target_type.
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    direction: Mapped[str] = mapped_column(String(8), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

# src/kgotla/models/group.py
"""SQLAlchemy models for groups and group membership."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from kgotla.db.session import Base
from kgotla.db.time import utcnow

GROUP_ROLE_ADMIN = "admin"
GROUP_ROLE_MODERATOR = "moderator"
GROUP_ROLE_MEMBER = "member"


class Group(Base):
    """Location, interest or cultural group that posts can belong to."""

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    location: Mapped[str | None] = mapped_column(String(100), nullable=True)
    # "location", "interest" or "cultural"; free text for now.
    category: Mapped[str | None] = mapped_column(String(50), nullable=True)
    # Denormalized; maintained by the join/leave endpoints.
    member_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    creator_id: Mapped[str | None] = mapped_column(
        String(128),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class GroupMember(Base):
    """Join table mapping users into groups."""

    __tablename__ = "group_members"

    group_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[str] = mapped_column(
        String(128),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=GROUP_ROLE_MEMBER)
    joined_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

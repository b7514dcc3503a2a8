"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import Field

from .common import CamelModel

TargetTypeLiteral = Literal["post", "comment"]
DirectionLiteral = Literal["up", "down"]
VoteStatusLiteral = Literal["added", "removed", "switched"]


class VoteCreate(CamelModel):
    """Schema for casting a vote on a post or comment."""

    target_type: TargetTypeLiteral = Field(..., description="Kind of entity being voted on")
    target_id: int = Field(..., description="Identifier of the post or comment")
    direction: DirectionLiteral = Field(..., description="'up' or 'down'")


class VoteResponse(CamelModel):
    """Outcome of a vote intent together with the target's new tallies."""

    status: VoteStatusLiteral
    direction: DirectionLiteral | None = None
    upvote_count: int
    downvote_count: int


class MyVoteResponse(CamelModel):
    """The caller's current vote on a target, if any."""

    direction: DirectionLiteral | None = None

"""Vote ledger for posts and comments.

Each voter owns at most one vote per target. Casting a vote runs a
three-way toggle against that slot:

* no vote yet          -> insert it and bump the matching counter
* same direction again -> delete it and decrement that counter
* opposite direction   -> flip it, moving one unit between the counters

The target's ``upvote_count`` / ``downvote_count`` columns are
denormalized tallies of the ``votes`` table. This module is their only
writer apart from :mod:`kgotla.services.vote_reconciliation`.

The whole read-modify-write runs in one transaction that holds a row lock
on the target, so concurrent casts on the same target serialize and the
vote row and counters are committed together or not at all.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import case, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kgotla.models import Comment, Post, Vote
from kgotla.models.vote import (
    TARGET_TYPE_COMMENT,
    TARGET_TYPE_POST,
    VOTE_DIRECTION_DOWN,
    VOTE_DIRECTION_UP,
    VOTE_DIRECTIONS,
)

logger = logging.getLogger(__name__)

VOTE_STATUS_ADDED = "added"
VOTE_STATUS_REMOVED = "removed"
VOTE_STATUS_SWITCHED = "switched"

VotableTarget = Post | Comment

_TARGET_MODELS: dict[str, type[Post] | type[Comment]] = {
    TARGET_TYPE_POST: Post,
    TARGET_TYPE_COMMENT: Comment,
}

_COUNTER_COLUMNS = {
    VOTE_DIRECTION_UP: "upvote_count",
    VOTE_DIRECTION_DOWN: "downvote_count",
}


class VoteLedgerError(Exception):
    """Base class for vote ledger failures."""


class TargetNotFoundError(VoteLedgerError):
    """The post or comment being voted on does not exist."""

    def __init__(self, target_type: str, target_id: int) -> None:
        super().__init__(f"{target_type.capitalize()} {target_id} not found")
        self.target_type = target_type
        self.target_id = target_id


class InvalidDirectionError(VoteLedgerError, ValueError):
    """Direction is not one of ``up`` / ``down``."""


class InvalidTargetTypeError(VoteLedgerError, ValueError):
    """Target type is not one of ``post`` / ``comment``."""


@dataclass(frozen=True)
class VoteResult:
    """Outcome of :func:`cast_vote` and the target's tallies afterwards."""

    status: str
    direction: str | None
    upvote_count: int
    downvote_count: int


def _opposite(direction: str) -> str:
    return VOTE_DIRECTION_DOWN if direction == VOTE_DIRECTION_UP else VOTE_DIRECTION_UP


def _resolve_target_model(target_type: str, direction: str) -> type[Post] | type[Comment]:
    if direction not in VOTE_DIRECTIONS:
        raise InvalidDirectionError(f"Invalid vote direction: {direction!r}")
    model = _TARGET_MODELS.get(target_type)
    if model is None:
        raise InvalidTargetTypeError(f"Invalid vote target type: {target_type!r}")
    return model


def _lock_target(
    db: Session,
    model: type[Post] | type[Comment],
    target_id: int,
) -> VotableTarget | None:
    # Soft-deleted targets do not accept votes.
    stmt = (
        select(model)
        .where(model.id == target_id, model.deleted.is_(False))
        .with_for_update()
    )
    return db.scalars(stmt).first()


def _find_vote(
    db: Session,
    *,
    voter_id: str,
    target_type: str,
    target_id: int,
) -> Vote | None:
    stmt = select(Vote).where(
        Vote.voter_id == voter_id,
        Vote.target_type == target_type,
        Vote.target_id == target_id,
    )
    return db.scalars(stmt).first()


def _adjust_counter(target: VotableTarget, direction: str, delta: int) -> None:
    """Apply ``counter = counter + delta`` as a SQL expression at flush time.

    Decrements are floored at zero; reconciliation repairs any drift
    left behind.
    """
    column = _COUNTER_COLUMNS[direction]
    stored = getattr(target, column)
    if delta < 0 and isinstance(stored, int) and stored + delta < 0:
        logger.warning(
            "Counter %s on %s %s would go negative (%d%+d); clamping to 0",
            column,
            type(target).__name__.lower(),
            target.id,
            stored,
            delta,
        )
    expression = getattr(type(target), column) + delta
    if delta < 0:
        expression = case((expression >= 0, expression), else_=0)
    setattr(target, column, expression)


def _insert_vote(
    db: Session,
    *,
    voter_id: str,
    target_type: str,
    target_id: int,
    direction: str,
) -> Vote | None:
    """Insert a fresh vote inside a savepoint.

    Returns ``None`` when a concurrent writer already holds the slot.
    """
    vote = Vote(
        voter_id=voter_id,
        target_type=target_type,
        target_id=target_id,
        direction=direction,
    )
    try:
        with db.begin_nested():
            db.add(vote)
    except IntegrityError:
        logger.warning(
            "Concurrent vote detected for voter=%s %s=%s; using the stored vote",
            voter_id,
            target_type,
            target_id,
        )
        return None
    return vote


def _apply_toggle(
    db: Session,
    *,
    target: VotableTarget,
    existing: Vote | None,
    voter_id: str,
    target_type: str,
    target_id: int,
    direction: str,
) -> tuple[str, str | None]:
    if existing is None:
        inserted = _insert_vote(
            db,
            voter_id=voter_id,
            target_type=target_type,
            target_id=target_id,
            direction=direction,
        )
        if inserted is not None:
            _adjust_counter(target, direction, +1)
            return VOTE_STATUS_ADDED, direction

        # Lost the insert race; the winning row already counted this intent.
        existing = _find_vote(
            db, voter_id=voter_id, target_type=target_type, target_id=target_id
        )
        if existing is None:
            raise VoteLedgerError("Vote slot conflict could not be resolved")
        if existing.direction == direction:
            return VOTE_STATUS_ADDED, direction

    if existing.direction == direction:
        db.delete(existing)
        _adjust_counter(target, direction, -1)
        return VOTE_STATUS_REMOVED, None

    _adjust_counter(target, _opposite(direction), -1)
    _adjust_counter(target, direction, +1)
    existing.direction = direction
    return VOTE_STATUS_SWITCHED, direction


def cast_vote(
    db: Session,
    *,
    voter_id: str,
    target_type: str,
    target_id: int,
    direction: str,
) -> VoteResult:
    """Record a voter's intent on a post or comment.

    Args:
        db: Database session; the call commits on success.
        voter_id: Identifier of the authenticated voter.
        target_type: ``"post"`` or ``"comment"``.
        target_id: Identifier of the target entity.
        direction: ``"up"`` or ``"down"``.

    Returns:
        The transition that was applied and the target's updated tallies.

    Raises:
        InvalidDirectionError: If ``direction`` is not ``up`` or ``down``.
        InvalidTargetTypeError: If ``target_type`` is not ``post`` or ``comment``.
        TargetNotFoundError: If the target does not exist or was deleted.
    """
    model = _resolve_target_model(target_type, direction)

    target = _lock_target(db, model, target_id)
    if target is None:
        raise TargetNotFoundError(target_type, target_id)

    try:
        existing = _find_vote(
            db, voter_id=voter_id, target_type=target_type, target_id=target_id
        )
        status, new_direction = _apply_toggle(
            db,
            target=target,
            existing=existing,
            voter_id=voter_id,
            target_type=target_type,
            target_id=target_id,
            direction=direction,
        )

        db.flush()
        db.refresh(target)
        result = VoteResult(
            status=status,
            direction=new_direction,
            upvote_count=target.upvote_count,
            downvote_count=target.downvote_count,
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.debug(
        "Vote %s by %s on %s=%s (up=%d, down=%d)",
        status,
        voter_id,
        target_type,
        target_id,
        result.upvote_count,
        result.downvote_count,
    )
    return result


def get_vote(
    db: Session,
    *,
    voter_id: str,
    target_type: str,
    target_id: int,
) -> Vote | None:
    """Return the voter's current vote on a target, if any."""
    if target_type not in _TARGET_MODELS:
        raise InvalidTargetTypeError(f"Invalid vote target type: {target_type!r}")
    return _find_vote(db, voter_id=voter_id, target_type=target_type, target_id=target_id)

"""
kgotla.services.vote_reconciliation: Vote Counter Reconciliation
=================================================================

Safety net for the denormalized ``upvote_count`` / ``downvote_count``
columns on posts and comments.

How it works:
    1. ``COUNT(*)`` the ``votes`` table grouped by (target_type, target_id,
       direction).
    2. Compare against the stored counters on every post and comment,
       including soft-deleted ones.
    3. For each mismatch, lock the target row, recount its votes and
       overwrite the counters with the true values.
    4. Log all corrections for audit.

Votes whose target row no longer exists are reported as orphans but left
in place.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from kgotla.db.time import utc_isoformat
from kgotla.models import Comment, Post, Vote
from kgotla.models.vote import (
    TARGET_TYPE_COMMENT,
    TARGET_TYPE_POST,
    VOTE_DIRECTION_DOWN,
    VOTE_DIRECTION_UP,
)

logger = logging.getLogger(__name__)

_TARGETS: tuple[tuple[str, type[Post] | type[Comment]], ...] = (
    (TARGET_TYPE_POST, Post),
    (TARGET_TYPE_COMMENT, Comment),
)


def _tally_votes(db: Session) -> dict[tuple[str, int], dict[str, int]]:
    rows = db.execute(
        select(
            Vote.target_type,
            Vote.target_id,
            Vote.direction,
            func.count().label("actual"),
        ).group_by(Vote.target_type, Vote.target_id, Vote.direction)
    ).all()

    tallies: dict[tuple[str, int], dict[str, int]] = {}
    for row in rows:
        tallies.setdefault((row.target_type, row.target_id), {})[row.direction] = row.actual
    return tallies


def _recount_target(db: Session, target_type: str, target_id: int) -> tuple[int, int]:
    rows = db.execute(
        select(Vote.direction, func.count().label("actual"))
        .where(Vote.target_type == target_type, Vote.target_id == target_id)
        .group_by(Vote.direction)
    ).all()
    counts = {row.direction: row.actual for row in rows}
    return counts.get(VOTE_DIRECTION_UP, 0), counts.get(VOTE_DIRECTION_DOWN, 0)


def reconcile_vote_counters(db: Session, *, dry_run: bool = False) -> dict[str, Any]:
    """Validate target vote counters against the ``votes`` table and fix drift.

    Returns ``{"checked": N, "corrected": M, "orphaned_votes": K,
    "corrections": [...], "dry_run": bool, "timestamp": iso}``.
    """
    tallies = _tally_votes(db)
    corrections: list[dict[str, Any]] = []
    seen: set[tuple[str, int]] = set()
    checked = 0

    for target_type, model in _TARGETS:
        rows = db.execute(
            select(model.id, model.upvote_count, model.downvote_count).order_by(model.id)
        ).all()
        for row in rows:
            checked += 1
            key = (target_type, row.id)
            seen.add(key)
            actual = tallies.get(key, {})
            actual_up = actual.get(VOTE_DIRECTION_UP, 0)
            actual_down = actual.get(VOTE_DIRECTION_DOWN, 0)
            if (row.upvote_count, row.downvote_count) == (actual_up, actual_down):
                continue

            if not dry_run:
                # Recount under a row lock so a concurrent vote is not overwritten.
                db.execute(select(model.id).where(model.id == row.id).with_for_update())
                actual_up, actual_down = _recount_target(db, target_type, row.id)
                db.execute(
                    update(model)
                    .where(model.id == row.id)
                    .values(upvote_count=actual_up, downvote_count=actual_down)
                )

            corrections.append({
                "target_type": target_type,
                "target_id": row.id,
                "stored_up": row.upvote_count,
                "stored_down": row.downvote_count,
                "actual_up": actual_up,
                "actual_down": actual_down,
            })

    orphaned_votes = sum(
        sum(counts.values()) for key, counts in tallies.items() if key not in seen
    )

    if not dry_run:
        db.commit()

    if corrections:
        logger.warning(
            "Vote reconciliation: %s %d/%d counters: %s",
            "found drift in" if dry_run else "corrected",
            len(corrections), checked, corrections,
        )
    else:
        logger.info("Vote reconciliation: all %d counters match", checked)
    if orphaned_votes:
        logger.warning("Vote reconciliation: %d votes reference missing targets", orphaned_votes)

    return {
        "checked": checked,
        "corrected": 0 if dry_run else len(corrections),
        "orphaned_votes": orphaned_votes,
        "corrections": corrections,
        "dry_run": dry_run,
        "timestamp": utc_isoformat(),
    }

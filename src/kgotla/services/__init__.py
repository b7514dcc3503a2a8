# src/kgotla/services/__init__.py
"""Business logic services for the Kgotla application."""

from .vote_ledger import (
    InvalidDirectionError,
    InvalidTargetTypeError,
    TargetNotFoundError,
    VoteLedgerError,
    VoteResult,
    cast_vote,
    get_vote,
)
from .vote_reconciliation import reconcile_vote_counters

__all__ = [
    "InvalidDirectionError",
    "InvalidTargetTypeError",
    "TargetNotFoundError",
    "VoteLedgerError",
    "VoteResult",
    "cast_vote",
    "get_vote",
    "reconcile_vote_counters",
]

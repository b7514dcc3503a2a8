"""Recompute post and comment vote counters from the votes table."""
from __future__ import annotations

import argparse
import json
import logging
import sys

from kgotla.core.settings import settings
from kgotla.db.session import SessionLocal
from kgotla.services.vote_reconciliation import reconcile_vote_counters


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report drifted counters without writing corrections.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Run one reconciliation pass and print the summary as JSON.

    Returns 1 when drift was found during a dry run so schedulers can alert.
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )

    with SessionLocal() as db:
        summary = reconcile_vote_counters(db, dry_run=args.dry_run)

    print(json.dumps(summary, indent=2))
    if args.dry_run and summary["corrections"]:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

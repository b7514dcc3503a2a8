# src/kgotla/scripts/migrate.py
"""Apply or inspect Alembic migrations for the configured database."""
from __future__ import annotations

import argparse
import os
import sys

from alembic import command
from alembic.config import Config

from kgotla.core.settings import settings

MIGRATIONS_DIR = os.path.abspath(
    os.path.join(os.path.dirname(__file__), "..", "..", "..", "migrations")
)


def build_config(database_url: str | None = None) -> Config:
    """Return an Alembic config pointed at the bundled migrations folder."""
    cfg = Config(os.path.join(MIGRATIONS_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", MIGRATIONS_DIR)
    cfg.set_main_option("sqlalchemy.url", database_url or settings.database_url_sync)
    return cfg


def run_upgrade_head() -> None:
    """Upgrade the configured database to the latest schema revision."""
    command.upgrade(build_config(), "head")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    sub = parser.add_subparsers(dest="action")
    upgrade = sub.add_parser("upgrade", help="Upgrade to a revision (default: head)")
    upgrade.add_argument("revision", nargs="?", default="head")
    upgrade.add_argument("--sql", action="store_true", help="Print SQL instead of executing")
    downgrade = sub.add_parser("downgrade", help="Downgrade to a revision")
    downgrade.add_argument("revision")
    sub.add_parser("current", help="Show the database's current revision")
    args = parser.parse_args(argv)

    cfg = build_config()
    if args.action == "downgrade":
        command.downgrade(cfg, args.revision)
    elif args.action == "current":
        command.current(cfg, verbose=True)
    elif args.action == "upgrade":
        command.upgrade(cfg, args.revision, sql=args.sql)
    else:
        run_upgrade_head()
    return 0


if __name__ == "__main__":
    sys.exit(main())

# mypy: ignore-errors
# tests/test_migrate_cli.py
"""Tests for the migration command wrapper."""

import os

from kgotla.scripts import migrate


class _RecordingCommand:
    def __init__(self) -> None:
        self.calls = []

    def upgrade(self, cfg, revision, sql=False):
        self.calls.append(("upgrade", revision, sql, cfg))

    def downgrade(self, cfg, revision):
        self.calls.append(("downgrade", revision, cfg))

    def current(self, cfg, verbose=False):
        self.calls.append(("current", verbose, cfg))


def test_config_points_at_migrations_folder() -> None:
    cfg = migrate.build_config("sqlite:///elsewhere.db")

    assert cfg.get_main_option("script_location") == migrate.MIGRATIONS_DIR
    assert cfg.get_main_option("sqlalchemy.url") == "sqlite:///elsewhere.db"
    assert os.path.isfile(os.path.join(migrate.MIGRATIONS_DIR, "env.py"))


def test_default_action_upgrades_to_head(monkeypatch) -> None:
    recorder = _RecordingCommand()
    monkeypatch.setattr(migrate, "command", recorder)

    assert migrate.main([]) == 0
    assert recorder.calls[0][:3] == ("upgrade", "head", False)


def test_upgrade_sql_and_downgrade(monkeypatch) -> None:
    recorder = _RecordingCommand()
    monkeypatch.setattr(migrate, "command", recorder)

    migrate.main(["upgrade", "5c1d7a9e3b20", "--sql"])
    migrate.main(["downgrade", "base"])

    assert recorder.calls[0][:3] == ("upgrade", "5c1d7a9e3b20", True)
    assert recorder.calls[1][:2] == ("downgrade", "base")

# tests/test_db_time.py
from datetime import UTC, datetime, timedelta, timezone

from kgotla.db.time import utc_isoformat, utcnow


def test_utcnow_is_timezone_aware() -> None:
    assert utcnow().tzinfo is UTC


def test_naive_values_are_treated_as_utc() -> None:
    assert utc_isoformat(datetime(2026, 3, 1, 12, 0)) == "2026-03-01T12:00:00+00:00"


def test_offsets_are_converted_to_utc() -> None:
    sast = timezone(timedelta(hours=2))
    assert utc_isoformat(datetime(2026, 3, 1, 14, 0, tzinfo=sast)) == "2026-03-01T12:00:00+00:00"

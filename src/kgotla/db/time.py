"""UTC clock helpers shared by models and jobs."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Timezone-aware now, used as the default for every timestamp column."""
    return datetime.now(UTC)


def utc_isoformat(value: datetime | None = None) -> str:
    """Render ``value`` (default: now) as an ISO 8601 string in UTC."""
    if value is None:
        value = utcnow()
    elif value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat()

"""Timestamps for stored tasks and generated ids."""

from datetime import UTC, datetime


def now_utc() -> datetime:
    return datetime.now(UTC)


def unix_millis(moment: datetime) -> int:
    """Milliseconds since the epoch, truncated."""
    return int(moment.timestamp() * 1000)


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """
    Read a ``created`` value from front matter or a Mongo document.

    YAML and pymongo may already hand back a datetime. Strings are ISO 8601,
    with a trailing ``Z`` accepted for UTC.
    """
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00"))

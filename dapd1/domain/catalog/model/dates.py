"""ISO-8601 timestamps as stored in the catalog.

Values are always UTC with millisecond precision and a ``Z`` suffix, so
string order in the store is chronological order.
"""

from datetime import UTC, datetime, timedelta


def format_timestamp(dt: datetime) -> str:
    """Render an aware or naive (assumed UTC) datetime for storage."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    dt = dt.astimezone(UTC)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


def ceil_to_millisecond(dt: datetime) -> datetime:
    """Round up to the next whole millisecond, the finest step the store keeps.

    Comparing stored values against the rounded bound gives the same answer as
    comparing against the exact one.
    """
    extra = dt.microsecond % 1000
    if extra:
        dt += timedelta(microseconds=1000 - extra)
    return dt


def parse_timestamp(value: str) -> datetime:
    """Parse a stored or user-supplied ISO-8601 string into an aware UTC datetime.

    Raises:
        ValueError: If the value is not ISO-8601.
    """
    dt = datetime.fromisoformat(value.strip())
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def utcnow() -> datetime:
    return datetime.now(UTC)

"""
Date parser utility for FPL timestamps.

The FPL API reports deadlines and transfer times as ISO-8601 strings,
usually with a trailing 'Z'. Everything is normalized to timezone-aware
UTC datetimes so deadline arithmetic never mixes naive and aware values.
"""

from datetime import datetime, timezone
from typing import Optional

from .constants import LATE_NIGHT_END_HOUR, LATE_NIGHT_START_HOUR


def parse_timestamp(value: str) -> datetime:
    """
    Parse an FPL ISO-8601 timestamp into an aware UTC datetime.

    Args:
        value: Timestamp such as "2024-08-16T17:30:00Z"

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ValueError: If the string is empty or not ISO-8601

    Examples:
        >>> parse_timestamp("2024-08-16T17:30:00Z")
        datetime.datetime(2024, 8, 16, 17, 30, tzinfo=datetime.timezone.utc)
    """
    value = value.strip()

    if not value:
        raise ValueError("Timestamp cannot be empty")

    if value.endswith('Z'):
        value = value[:-1] + '+00:00'

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Could not parse timestamp '{value}'")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_timestamp_safe(value: Optional[str], default: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse a timestamp, returning default on failure instead of raising.

    Args:
        value: Timestamp string, or None
        default: Value to return if parsing fails (default: None)

    Returns:
        Parsed datetime or default value
    """
    if not value:
        return default
    try:
        return parse_timestamp(value)
    except ValueError:
        return default


def hours_between(start: datetime, end: datetime) -> float:
    """Signed hours from start to end (positive when end is later)."""
    return (end - start).total_seconds() / 3600


def is_late_night(hour: int) -> bool:
    """Check whether a local hour falls in the 23:00-05:59 window."""
    return hour >= LATE_NIGHT_START_HOUR or hour <= LATE_NIGHT_END_HOUR


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """Format an aware datetime as ISO-8601 with a 'Z' suffix."""
    if dt is None:
        return None
    return dt.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')

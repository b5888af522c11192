"""Timestamp utilities for UTC handling and event date parsing.

This module provides utilities for working with event timestamps in UTC:
- Getting current UTC time
- Parsing ISO 8601 date and datetime strings
- Converting timezone-naive to timezone-aware UTC
- Reducing datetimes to calendar days and Sunday-first weekday numbers
"""

from datetime import date, datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Current UTC time with timezone info
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Ensure a datetime is timezone-aware and in UTC.

    If the datetime is timezone-naive, it's treated as UTC.
    If the datetime has a different timezone, it's converted to UTC.

    Args:
        dt: Datetime to convert (can be None)

    Returns:
        Timezone-aware datetime in UTC, or None if input is None

    Example:
        >>> naive = datetime(2025, 11, 4, 12, 0, 0)
        >>> ensure_utc(naive).tzinfo == timezone.utc
        True
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def parse_iso_datetime(iso_string: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 date or datetime string to UTC datetime.

    Supports:
    - 2024-05-10 (UTC midnight)
    - 2024-05-10T19:30
    - 2024-05-10T19:30:00Z
    - 2024-05-10T19:30:00+08:00
    - 2024-05-10 19:30:00

    Args:
        iso_string: ISO 8601 formatted string

    Returns:
        Timezone-aware datetime in UTC, or None if parsing fails

    Example:
        >>> parse_iso_datetime("2024-05-10T12:00:00Z").day
        10
        >>> parse_iso_datetime("next tuesday") is None
        True
    """
    if not isinstance(iso_string, str) or not iso_string.strip():
        return None

    cleaned = iso_string.strip()
    if cleaned.endswith(("Z", "z")):
        cleaned = cleaned[:-1] + "+00:00"

    try:
        dt = datetime.fromisoformat(cleaned)
    except ValueError:
        return None

    return ensure_utc(dt)


def utc_day(dt: datetime) -> date:
    """Return the UTC calendar day of a datetime, ignoring time-of-day."""
    return ensure_utc(dt).date()


def sunday_weekday(day: date) -> int:
    """Return the weekday of a date numbered 0 (Sunday) through 6 (Saturday).

    Example:
        >>> sunday_weekday(date(2024, 6, 2))
        0
        >>> sunday_weekday(date(2024, 6, 5))
        3
    """
    # date.weekday() is Monday-first
    return (day.weekday() + 1) % 7

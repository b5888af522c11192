"""Utility functions for value coercion and time handling."""

from .coercion import (
    first_present,
    is_text_candidate,
    lookup_path,
    parse_leading_int,
    to_number,
    to_text,
)
from .timestamps import (
    ensure_utc,
    parse_iso_datetime,
    sunday_weekday,
    utc_day,
    utc_now,
)

__all__ = [
    # Coercion
    "first_present",
    "lookup_path",
    "to_text",
    "to_number",
    "is_text_candidate",
    "parse_leading_int",
    # Timestamps
    "utc_now",
    "ensure_utc",
    "parse_iso_datetime",
    "utc_day",
    "sunday_weekday",
]

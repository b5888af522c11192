"""Core domain models for event records.

This module defines the data structures used throughout the application:
- RawEvent: an unvalidated source document describing one event
- NormalizedEvent: canonical projection of a RawEvent used for filtering
"""

from dataclasses import dataclass, field
from typing import Any, Optional

# Raw records come straight from the parsed JSON document and carry no schema.
RawEvent = Any

SEARCH_BLOB_FIELDS = (
    "title",
    "description",
    "type",
    "venue_name",
    "district",
    "start",
    "end",
    "url",
)


@dataclass(frozen=True)
class NormalizedEvent:
    """Canonical, fully-resolved projection of a raw event record.

    Instances are immutable once built. The search blob is derived from the
    other fields at construction time and cannot be supplied by callers.

    Attributes:
        raw_ref: The original record, returned verbatim in query results
        title: Event title
        description: Free-text description
        type: Category label
        start: ISO-like start date/time, or ""
        end: ISO-like end date/time, or ""
        url: Link to the event page
        price_min: Lowest price, or None when unknown
        price_max: Highest price, or None when unknown
        venue_name: Venue name
        district: District or area label
        lat: Venue latitude, or None
        lng: Venue longitude, or None
        search_blob: Lowercased text used for substring search
    """

    raw_ref: RawEvent = field(compare=False, repr=False)
    title: str = ""
    description: str = ""
    type: str = ""
    start: str = ""
    end: str = ""
    url: str = ""
    price_min: Optional[float] = None
    price_max: Optional[float] = None
    venue_name: str = ""
    district: str = ""
    lat: Optional[float] = None
    lng: Optional[float] = None
    search_blob: str = field(init=False, default="")

    def __post_init__(self):
        """Compute the search blob from the text fields."""
        object.__setattr__(self, "search_blob", build_search_blob(self))

    @property
    def is_free(self) -> bool:
        """True if either price bound is exactly zero.

        Unknown prices are never free. A zero minimum counts as free even when
        the maximum is positive.
        """
        return self.price_min == 0 or self.price_max == 0

    @property
    def has_dates(self) -> bool:
        """True if the record carries a start or an end value."""
        return bool(self.start or self.end)


def build_search_blob(event: NormalizedEvent) -> str:
    """Join the non-empty searchable fields with single spaces, lowercased.

    Args:
        event: Normalized event to index

    Returns:
        Lowercase search text

    Example:
        >>> build_search_blob(NormalizedEvent(raw_ref={}, title="Jazz", district="Daan"))
        'jazz daan'
    """
    parts = [getattr(event, name) for name in SEARCH_BLOB_FIELDS]
    return " ".join(part for part in parts if part).lower()

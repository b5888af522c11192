"""Helpers for projecting a working set into auxiliary listings."""

from typing import Iterable, List

from event_query.domain.models import NormalizedEvent

from .models import MetaListing


def distinct_sorted(values: Iterable[str]) -> List[str]:
    """Distinct non-empty values in ascending order."""
    return sorted({value for value in values if value})


def build_meta_listing(events: Iterable[NormalizedEvent]) -> MetaListing:
    """List the distinct types and districts present in a working set.

    Args:
        events: Normalized events

    Returns:
        MetaListing with sorted, de-duplicated, non-empty values
    """
    events = list(events)
    return MetaListing(
        types=distinct_sorted(event.type for event in events),
        districts=distinct_sorted(event.district for event in events),
    )

"""Event normalization service for converting raw records to NormalizedEvent.

This module implements the normalization logic that:
1. Resolves each canonical field through its ordered alias chain
2. Coerces text fields to strings and numeric fields to finite floats
3. Degrades malformed or missing values to "" / None instead of raising
4. Derives the lowercase search blob used by text search
"""

import logging
from collections.abc import Mapping
from typing import Iterable, Optional, Tuple

from event_query.domain.models import NormalizedEvent, RawEvent
from event_query.logging import get_logger
from event_query.utils.coercion import first_present, is_text_candidate, to_number, to_text

from .resolution import NUMERIC_FIELDS, TEXT_FIELDS

logger = get_logger(__name__, component="normalization")


class EventNormalizer:
    """Normalizes raw event records into canonical NormalizedEvent models.

    Responsibilities:
    - Resolve aliased field names (title/name, start_at/start/date, ...)
    - Read venue fields from a nested venue object or flattened keys
    - Parse prices and coordinates leniently
    - Never fail: one malformed record must not block the rest of a batch
    """

    def __init__(self, logger_instance: Optional[logging.Logger] = None):
        """Initialize EventNormalizer.

        Args:
            logger_instance: Logger instance (defaults to module logger)
        """
        self.logger = logger_instance or logger

    def normalize(self, raw: RawEvent) -> NormalizedEvent:
        """Normalize a single raw record.

        A record that is not a mapping at all is read as an empty mapping, so
        every derived field takes its empty value while raw_ref still points
        at the original object.

        Args:
            raw: Raw record as parsed from the source document

        Returns:
            NormalizedEvent referencing the raw record
        """
        record = raw if isinstance(raw, Mapping) else {}

        text_values = {
            name: to_text(first_present(record, paths, accept=is_text_candidate))
            for name, paths in TEXT_FIELDS.items()
        }
        numeric_values = {
            name: to_number(first_present(record, paths))
            for name, paths in NUMERIC_FIELDS.items()
        }

        return NormalizedEvent(raw_ref=raw, **text_values, **numeric_values)

    def normalize_batch(self, raws: Iterable[RawEvent]) -> Tuple[NormalizedEvent, ...]:
        """Normalize a whole batch, preserving input order.

        Args:
            raws: Raw records from the source document

        Returns:
            Tuple of NormalizedEvent in the same order as the input
        """
        events = tuple(self.normalize(raw) for raw in raws)

        undated = sum(1 for event in events if not event.has_dates)
        self.logger.debug(
            f"Normalized {len(events)} events",
            extra={
                "event": "normalization.batch.completed",
                "event_count": len(events),
                "undated_count": undated,
            },
        )
        return events


_default_normalizer = EventNormalizer()


def normalize(raw: RawEvent) -> NormalizedEvent:
    """Normalize one raw record with the module-level normalizer."""
    return _default_normalizer.normalize(raw)

"""In-memory working set with atomic reload.

The store owns a single reference to an immutable WorkingSet. A reload
normalizes the new batch completely before replacing that reference, and
every read dereferences it exactly once, so a query sees either the old set
or the new one and never a mixture.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Tuple, Union

from event_query.domain.models import NormalizedEvent, RawEvent
from event_query.logging import get_logger
from event_query.normalization import EventNormalizer
from event_query.query import EventQueryEngine, MetaListing, QueryParams, QueryResult, build_meta_listing
from event_query.utils.timestamps import utc_now

logger = get_logger(__name__, component="store")


@dataclass(frozen=True)
class WorkingSet:
    """Immutable snapshot of the normalized events being served.

    Attributes:
        events: Normalized events in source document order
        version: Increases by one on every reload; 0 before the first load
        loaded_at: When this snapshot was built (UTC)
    """

    events: Tuple[NormalizedEvent, ...] = ()
    version: int = 0
    loaded_at: datetime = field(default_factory=utc_now)

    def __len__(self) -> int:
        return len(self.events)


class EventStore:
    """Holds the current working set and answers queries against it."""

    def __init__(
        self,
        normalizer: Optional[EventNormalizer] = None,
        engine: Optional[EventQueryEngine] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize EventStore with an empty working set.

        Args:
            normalizer: Normalizer used on reload (defaults to EventNormalizer())
            engine: Query engine (defaults to EventQueryEngine())
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.normalizer = normalizer or EventNormalizer()
        self.engine = engine or EventQueryEngine()
        self.logger = logger_instance or logger
        self._current = WorkingSet()

    def reload(self, raw_batch: Iterable[RawEvent]) -> WorkingSet:
        """Replace the working set with a freshly normalized batch.

        Args:
            raw_batch: Complete sequence of raw records

        Returns:
            The new WorkingSet now being served
        """
        events = self.normalizer.normalize_batch(raw_batch)
        previous = self._current
        new_set = WorkingSet(events=events, version=previous.version + 1)

        self._current = new_set

        self.logger.info(
            f"Working set swapped: {len(previous)} -> {len(new_set)} events",
            extra={
                "event": "store.swapped",
                "version": new_set.version,
                "previous_count": len(previous),
                "event_count": len(new_set),
            },
        )
        return new_set

    def snapshot(self) -> WorkingSet:
        """Return the working set currently being served."""
        return self._current

    @property
    def version(self) -> int:
        return self._current.version

    def __len__(self) -> int:
        return len(self._current)

    def query(
        self, params: Union[QueryParams, Mapping[str, Any], None] = None
    ) -> QueryResult:
        """Answer an /events query against the current working set."""
        working_set = self._current
        return self.engine.execute(working_set.events, params)

    def meta(self) -> MetaListing:
        """List the distinct types and districts in the current working set."""
        return build_meta_listing(self._current.events)

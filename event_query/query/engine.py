"""Query engine for filtering and paginating normalized events.

This module implements the /events query logic that:
1. Resolves raw query parameters into a QueryPlan
2. Evaluates every active predicate against each NormalizedEvent (logical AND)
3. Counts the full filtered set and slices the requested page
4. Returns the raw records of the page in working-set order
"""

import logging
from datetime import datetime
from functools import lru_cache
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from event_query.domain.models import NormalizedEvent
from event_query.logging import get_logger
from event_query.utils.timestamps import parse_iso_datetime, sunday_weekday, utc_day

from .models import QueryParams, QueryPlan, QueryResult

logger = get_logger(__name__, component="query")

Interval = Tuple[datetime, datetime]


@lru_cache(maxsize=4096)
def _parse_instant(text: str) -> Optional[datetime]:
    """Cached date parsing; the same start/end strings recur on every query."""
    return parse_iso_datetime(text)


def effective_interval(event: NormalizedEvent) -> Optional[Interval]:
    """Return an event's [start, end] interval.

    When only one bound parses, the interval collapses to that instant. When
    neither parses, the event has no interval.

    Args:
        event: Normalized event

    Returns:
        (start, end) tuple of UTC datetimes, or None
    """
    start = _parse_instant(event.start) if event.start else None
    end = _parse_instant(event.end) if event.end else None
    if start is None and end is None:
        return None
    return (start or end, end or start)


def overlaps_range(
    event: NormalizedEvent,
    date_from: Optional[datetime],
    date_to: Optional[datetime],
) -> bool:
    """True if the event's effective interval overlaps [date_from, date_to].

    Either bound may be None, which relaxes that half of the test. Events
    without dates never overlap.
    """
    interval = effective_interval(event)
    if interval is None:
        return False
    start, end = interval
    if date_from is not None and end < date_from:
        return False
    if date_to is not None and start > date_to:
        return False
    return True


def hits_weekday(event: NormalizedEvent, weekday: int) -> bool:
    """True if any calendar day of the event falls on the given weekday.

    Days are compared at UTC day granularity. An interval covering a full
    week always matches; a shorter one matches when the first day on or after
    the start with that weekday is not past the end. An end before the start
    leaves only the start day to test.

    Args:
        event: Normalized event
        weekday: 0 (Sunday) through 6 (Saturday)
    """
    interval = effective_interval(event)
    if interval is None:
        return False

    first_day = utc_day(interval[0])
    last_day = utc_day(interval[1])
    if last_day < first_day:
        return sunday_weekday(first_day) == weekday

    span_days = (last_day - first_day).days
    days_until = (weekday - sunday_weekday(first_day)) % 7
    return days_until <= span_days


class EventQueryEngine:
    """Evaluates /events queries against a working set.

    The engine holds no state between calls. Predicates run in a fixed order
    (type, district, free-only, text, date range, weekday) and short-circuit
    on the first failure.
    """

    def __init__(self, logger_instance: Optional[logging.Logger] = None):
        """Initialize EventQueryEngine.

        Args:
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.logger = logger_instance or logger

    def matches(self, event: NormalizedEvent, plan: QueryPlan) -> bool:
        """Check one event against every active predicate of a plan."""
        if plan.type and event.type != plan.type:
            return False
        if plan.district and event.district != plan.district:
            return False
        if plan.free_only and not event.is_free:
            return False
        if plan.words and not all(word in event.search_blob for word in plan.words):
            return False
        if plan.date_window and not overlaps_range(event, plan.date_from, plan.date_to):
            return False
        if plan.weekday is not None and not hits_weekday(event, plan.weekday):
            return False
        return True

    def filter(
        self, events: Sequence[NormalizedEvent], plan: QueryPlan
    ) -> List[NormalizedEvent]:
        """Return all matching events in their original order, before pagination."""
        return [event for event in events if self.matches(event, plan)]

    def execute(
        self,
        events: Sequence[NormalizedEvent],
        params: Union[QueryParams, Mapping[str, Any], None] = None,
    ) -> QueryResult:
        """Run a query and return the requested page.

        Args:
            events: Working set to search
            params: QueryParams or a flat mapping of string parameters

        Returns:
            QueryResult with total, applied offset/limit and the page's raw records
        """
        if not isinstance(params, QueryParams):
            params = QueryParams.from_mapping(params)
        plan = params.resolve()

        matched = self.filter(events, plan)
        page = matched[plan.offset : plan.offset + plan.limit]

        self.logger.debug(
            f"Query matched {len(matched)} of {len(events)} events",
            extra={
                "event": "query.executed",
                "active_filters": plan.active_filters(),
                "total": len(matched),
                "returned": len(page),
                "offset": plan.offset,
                "limit": plan.limit,
            },
        )

        return QueryResult(
            total=len(matched),
            offset=plan.offset,
            limit=plan.limit,
            results=[event.raw_ref for event in page],
        )


_default_engine = EventQueryEngine()


def query(
    events: Sequence[NormalizedEvent],
    params: Union[QueryParams, Mapping[str, Any], None] = None,
) -> QueryResult:
    """Run a query against a working set with the shared engine."""
    return _default_engine.execute(events, params)

"""Query engine for answering /events and /meta requests.

This module provides:
- QueryParams: Raw query parameters as received from callers
- QueryPlan: Resolved parameters the engine evaluates
- QueryResult / MetaListing: Response shapes
- EventQueryEngine: Service that filters and paginates a working set
- parse_weekday, overlaps_range, hits_weekday: Predicate helpers
"""

from .engine import EventQueryEngine, effective_interval, hits_weekday, overlaps_range, query
from .models import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    MetaListing,
    QueryParams,
    QueryPlan,
    QueryResult,
)
from .utils import build_meta_listing
from .weekday import parse_weekday

__all__ = [
    "EventQueryEngine",
    "query",
    "QueryParams",
    "QueryPlan",
    "QueryResult",
    "MetaListing",
    "build_meta_listing",
    "parse_weekday",
    "effective_interval",
    "overlaps_range",
    "hits_weekday",
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
]

"""Data models for the query engine.

This module defines the query parameters as received from callers, the
resolved plan the engine evaluates, and the response shapes for /events and
/meta.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from event_query.domain.models import RawEvent
from event_query.utils.coercion import parse_leading_int
from event_query.utils.timestamps import parse_iso_datetime

from .weekday import parse_weekday

DEFAULT_LIMIT = 200
MAX_LIMIT = 1000
DEFAULT_OFFSET = 0


class QueryParams(BaseModel):
    """Raw /events query parameters, all optional strings.

    Values are kept exactly as received; interpretation happens in resolve()
    so that malformed input falls back to defaults instead of failing
    validation.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    q: str = ""
    type: str = ""
    district: str = ""
    weekday: str = ""
    free_only: str = Field("false", alias="freeOnly")
    date_from: str = Field("", alias="dateFrom")
    date_to: str = Field("", alias="dateTo")
    limit: str = str(DEFAULT_LIMIT)
    offset: str = str(DEFAULT_OFFSET)

    @field_validator("*", mode="before")
    @classmethod
    def coerce_to_string(cls, v: Any) -> str:
        """Accept any scalar; None becomes empty, lists keep their first item."""
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return str(v[0]) if v else ""
        return str(v)

    @classmethod
    def from_mapping(cls, params: Optional[Mapping[str, Any]] = None) -> "QueryParams":
        """Build from a flat mapping such as a parsed query string."""
        return cls.model_validate(dict(params or {}))

    def resolve(self) -> "QueryPlan":
        """Interpret the raw strings into a QueryPlan."""
        offset = parse_leading_int(self.offset)
        offset = max(0, offset or DEFAULT_OFFSET)

        # A limit of 0 is treated like a missing limit
        limit = parse_leading_int(self.limit) or DEFAULT_LIMIT
        limit = max(1, min(MAX_LIMIT, limit))

        return QueryPlan(
            words=tuple(self.q.strip().lower().split()),
            type=self.type,
            district=self.district,
            free_only=self.free_only.lower() == "true",
            weekday=parse_weekday(self.weekday),
            date_from=parse_iso_datetime(self.date_from) if self.date_from else None,
            date_to=parse_iso_datetime(self.date_to) if self.date_to else None,
            date_window=bool(self.date_from or self.date_to),
            offset=offset,
            limit=limit,
        )


@dataclass(frozen=True)
class QueryPlan:
    """Resolved query ready for evaluation.

    Attributes:
        words: Lowercased search words; all must occur in the search blob
        type: Exact category to match, or "" for any
        district: Exact district to match, or "" for any
        free_only: Keep only events with a zero price bound
        weekday: 0 (Sunday) through 6, or None for any day
        date_from: Lower bound of the date window, or None
        date_to: Upper bound of the date window, or None
        date_window: True when either bound was supplied; an unparsable
            bound still enables the filter but relaxes its own half
        offset: Number of matches to skip
        limit: Page size, 1 through 1000
    """

    words: Tuple[str, ...] = ()
    type: str = ""
    district: str = ""
    free_only: bool = False
    weekday: Optional[int] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    date_window: bool = False
    offset: int = DEFAULT_OFFSET
    limit: int = DEFAULT_LIMIT

    def active_filters(self) -> List[str]:
        """Names of the predicates this plan enables, in evaluation order."""
        active = []
        if self.type:
            active.append("type")
        if self.district:
            active.append("district")
        if self.free_only:
            active.append("free_only")
        if self.words:
            active.append("text")
        if self.date_window:
            active.append("date_range")
        if self.weekday is not None:
            active.append("weekday")
        return active


@dataclass
class QueryResult:
    """Paginated /events response.

    Attributes:
        total: Size of the filtered set before pagination
        offset: Offset actually applied
        limit: Limit actually applied
        results: Raw records of the requested page, in working-set order
    """

    total: int
    offset: int
    limit: int
    results: List[RawEvent] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "offset": self.offset,
            "limit": self.limit,
            "results": list(self.results),
        }


@dataclass
class MetaListing:
    """Distinct non-empty types and districts, each sorted ascending."""

    types: List[str] = field(default_factory=list)
    districts: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return asdict(self)

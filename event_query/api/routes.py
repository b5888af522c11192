"""HTTP routes for event queries."""

from typing import Any, Dict, List

from fastapi import APIRouter, Request

from event_query.store import EventStore

router = APIRouter(tags=["Events"])


def get_store(request: Request) -> EventStore:
    return request.app.state.store


@router.get("/events")
async def list_events(request: Request) -> Dict[str, Any]:
    """
    Filter and paginate events.

    Query parameters: q, type, district, weekday, freeOnly, dateFrom, dateTo,
    limit, offset. Values are passed through untouched so malformed input
    falls back to defaults instead of producing a 422.
    """
    result = get_store(request).query(dict(request.query_params))
    return result.to_dict()


@router.get("/meta")
async def get_meta(request: Request) -> Dict[str, List[str]]:
    """Distinct types and districts for building filter menus."""
    return get_store(request).meta().to_dict()


@router.get("/health", tags=["Health"])
async def health_check(request: Request) -> Dict[str, Any]:
    """Report the working set currently being served."""
    working_set = get_store(request).snapshot()
    return {
        "status": "healthy" if working_set.version > 0 else "empty",
        "version": working_set.version,
        "event_count": len(working_set),
        "loaded_at": working_set.loaded_at.isoformat(),
    }

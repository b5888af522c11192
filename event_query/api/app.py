"""FastAPI application factory for the event query service."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from event_query import __version__
from event_query.logging import get_logger
from event_query.scheduler import ReloadWatcher
from event_query.store import EventStore

from .routes import router

logger = get_logger(__name__, component="api")


def create_app(store: EventStore, watcher: Optional[ReloadWatcher] = None) -> FastAPI:
    """
    Build the FastAPI application around an already-loaded store.

    Args:
        store: Store answering /events and /meta
        watcher: Optional reload watcher started and stopped with the app

    Returns:
        Configured FastAPI instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if watcher is not None:
            watcher.start()
        logger.info(
            "Event query API started",
            extra={
                "event": "api.started",
                "event_count": len(store),
                "hot_reload": watcher is not None,
            },
        )

        yield

        logger.info("Shutting down event query API", extra={"event": "api.stopping"})
        if watcher is not None:
            watcher.shutdown(wait=False)

    app = FastAPI(
        title="Event Query API",
        description="Search, filter and paginate events loaded from a JSON document",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store
    app.include_router(router)
    return app

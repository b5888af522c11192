"""Main entry point for the event query service."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import uvicorn

from event_query.api import create_app
from event_query.config.exceptions import ConfigurationError
from event_query.config.loader import load_config
from event_query.logging import get_logger
from event_query.logging.config import configure_logging
from event_query.scheduler import ReloadWatcher
from event_query.source import EventSourceError, EventSourceLoader
from event_query.store import EventStore

logger = get_logger(__name__, component="cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Event Query Service - search and filter events from a JSON document"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml if present)",
    )
    parser.add_argument(
        "--events-file",
        default=None,
        help="Path to the events JSON file (overrides config and environment)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Load the events file once, report what was loaded and exit",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_config(args.config)
    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1

    # CLI > environment > config file
    log_level = args.log_level or app_config.logging.level
    configure_logging(
        level=log_level,
        format_type=app_config.logging.format,
        environment=env_config.environment,
    )

    events_path = args.events_file or app_config.source.path
    store = EventStore()
    loader = EventSourceLoader(events_path, store, encoding=app_config.source.encoding)

    try:
        working_set = loader.load()
    except EventSourceError as e:
        logger.error(
            f"Initial events load failed: {e}",
            extra={
                "event": "service.startup.failed",
                "error_type": type(e).__name__,
                "source_path": str(e.path),
            },
        )
        return 1

    if args.check:
        meta = store.meta()
        logger.info(
            f"Loaded {len(working_set)} events "
            f"({len(meta.types)} types, {len(meta.districts)} districts)",
            extra={
                "event": "service.check.completed",
                "event_count": len(working_set),
                "type_count": len(meta.types),
                "district_count": len(meta.districts),
            },
        )
        return 0

    watcher = None
    if app_config.watch.enabled:
        watcher = ReloadWatcher(
            reload_callable=loader.reload_if_changed,
            interval_seconds=app_config.watch.poll_interval_seconds,
        )

    app = create_app(store, watcher=watcher)

    logger.info(
        f"Server running http://{app_config.server.host}:{app_config.server.port}",
        extra={
            "event": "service.starting",
            "host": app_config.server.host,
            "port": app_config.server.port,
            "source_path": events_path,
        },
    )
    uvicorn.run(app, host=app_config.server.host, port=app_config.server.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())

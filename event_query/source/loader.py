"""Loader for the JSON document backing the event store.

This module reads the events document, hands the parsed records to the store,
and supports change-driven reloads:
1. Parse the file as a JSON array of raw records
2. Swap the store's working set to the new batch
3. Remember the file signature so unchanged files are skipped
4. On any failure keep serving the last valid working set
"""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple, Union
from uuid import uuid4

from event_query.domain.models import RawEvent
from event_query.logging import get_logger
from event_query.logging.context import log_context
from event_query.store import EventStore, WorkingSet

from .exceptions import EventSourceError, EventSourceNotFoundError, EventSourceParseError

logger = get_logger(__name__, component="source")

FileSignature = Tuple[int, int]


class EventSourceLoader:
    """Loads raw event records from a JSON file into an EventStore."""

    def __init__(
        self,
        path: Union[str, Path],
        store: EventStore,
        encoding: str = "utf-8",
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize EventSourceLoader.

        Args:
            path: Path to the JSON events document
            store: Store whose working set is replaced on load
            encoding: Text encoding of the document
            logger_instance: Optional logger instance (defaults to module logger)
        """
        self.path = Path(path)
        self.store = store
        self.encoding = encoding
        self.logger = logger_instance or logger
        self._loaded_signature: Optional[FileSignature] = None

    def read(self) -> List[RawEvent]:
        """Read and parse the events document.

        Returns:
            List of raw records in document order

        Raises:
            EventSourceNotFoundError: If the file does not exist
            EventSourceParseError: If the content is not a JSON array
            EventSourceError: If the file cannot be read
        """
        try:
            text = self.path.read_text(encoding=self.encoding)
        except FileNotFoundError as e:
            raise EventSourceNotFoundError(
                f"Events file not found: {self.path}", self.path
            ) from e
        except (OSError, UnicodeDecodeError) as e:
            raise EventSourceError(
                f"Failed to read events file {self.path}: {e}", self.path
            ) from e

        try:
            records = json.loads(text)
        except (ValueError, RecursionError) as e:
            # ValueError also covers integer literals past the digit limit
            raise EventSourceParseError(
                f"Invalid JSON in events file {self.path}: {e}", self.path
            ) from e

        if not isinstance(records, list):
            raise EventSourceParseError(
                f"Events file {self.path} must contain a JSON array, "
                f"got {type(records).__name__}",
                self.path,
            )

        return records

    def load(self) -> WorkingSet:
        """Read the document and swap it into the store.

        Returns:
            The new WorkingSet

        Raises:
            EventSourceError: If reading or parsing fails; the store is untouched
        """
        signature = self._signature()
        with log_context(reload_id=uuid4().hex[:8], source_path=str(self.path)):
            records = self.read()
            working_set = self.store.reload(records)
            self._loaded_signature = signature

            self.logger.info(
                f"Loaded {len(working_set)} events from {self.path}",
                extra={
                    "event": "source.reloaded",
                    "event_count": len(working_set),
                    "version": working_set.version,
                },
            )
        return working_set

    def has_changed(self) -> bool:
        """True if the file differs from the last successfully loaded one."""
        return self._signature() != self._loaded_signature

    def reload_if_changed(self) -> Optional[WorkingSet]:
        """Reload when the file changed; log and keep the old set on failure.

        Returns:
            The new WorkingSet, or None if nothing changed or the reload failed
        """
        if not self.has_changed():
            return None

        try:
            return self.load()
        except EventSourceError as e:
            self.logger.error(
                f"Events reload failed, keeping version {self.store.version}: {e}",
                extra={
                    "event": "source.reload_failed",
                    "source_path": str(self.path),
                    "error_type": type(e).__name__,
                    "serving_version": self.store.version,
                },
            )
            # Remember the broken file so it is not re-parsed on every poll
            self._loaded_signature = self._signature()
            return None

    def _signature(self) -> Optional[FileSignature]:
        """(mtime_ns, size) of the file, or None if it cannot be stat'ed."""
        try:
            stat = os.stat(self.path)
        except OSError:
            return None
        return (stat.st_mtime_ns, stat.st_size)

"""Custom exceptions for loading the backing events document."""

from pathlib import Path
from typing import Union


class EventSourceError(Exception):
    """Base exception for all source loading errors.

    Catching this exception covers every failure that should leave the store
    serving its previous working set.
    """

    def __init__(self, message: str, path: Union[str, Path]) -> None:
        """Initialize with the offending path.

        Args:
            message: Human-readable error message
            path: Path of the events document
        """
        super().__init__(message)
        self.path = Path(path)


class EventSourceNotFoundError(EventSourceError):
    """The events document does not exist."""

    pass


class EventSourceParseError(EventSourceError):
    """The events document is not valid JSON or not a JSON array."""

    pass

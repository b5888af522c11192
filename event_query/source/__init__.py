"""Loading of the JSON events document into the event store."""

from .exceptions import EventSourceError, EventSourceNotFoundError, EventSourceParseError
from .loader import EventSourceLoader

__all__ = [
    "EventSourceLoader",
    "EventSourceError",
    "EventSourceNotFoundError",
    "EventSourceParseError",
]

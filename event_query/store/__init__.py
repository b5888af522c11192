"""In-memory event store with atomic working-set replacement."""

from .working_set import EventStore, WorkingSet

__all__ = ["EventStore", "WorkingSet"]

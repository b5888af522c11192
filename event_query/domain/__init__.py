"""Domain models for the event query service."""

from .models import SEARCH_BLOB_FIELDS, NormalizedEvent, RawEvent, build_search_blob

__all__ = ["NormalizedEvent", "RawEvent", "SEARCH_BLOB_FIELDS", "build_search_blob"]

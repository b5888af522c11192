"""Normalization layer for converting raw event records to canonical models.

This module provides:
- EventNormalizer: Service to convert raw records into NormalizedEvent
- normalize: Convenience function using a shared normalizer
- TEXT_FIELDS / NUMERIC_FIELDS: The alias resolution table
"""

from .resolution import NUMERIC_FIELDS, TEXT_FIELDS
from .service import EventNormalizer, normalize

__all__ = [
    "EventNormalizer",
    "normalize",
    "TEXT_FIELDS",
    "NUMERIC_FIELDS",
]

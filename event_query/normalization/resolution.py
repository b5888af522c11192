"""Static field resolution table for raw event records.

Each canonical field lists its candidate key paths in priority order. The
first candidate that resolves wins; later aliases are only consulted when the
earlier ones are missing.
"""

from typing import Dict, Tuple

from event_query.utils.coercion import FieldPath

TEXT_FIELDS: Dict[str, Tuple[FieldPath, ...]] = {
    "title": (("title",), ("name",)),
    "description": (("desc",), ("description",)),
    "type": (("type",), ("category",)),
    "start": (("start_at",), ("start",), ("date",)),
    "end": (("end_at",), ("end",)),
    "url": (("url",), ("link",)),
    "venue_name": (("venue", "name"), ("venue_name",)),
    "district": (("venue", "district"), ("venue", "area"), ("district",)),
}

# A bare "price" stands in for both bounds.
NUMERIC_FIELDS: Dict[str, Tuple[FieldPath, ...]] = {
    "price_min": (("price_min",), ("priceMin",), ("price",)),
    "price_max": (("price_max",), ("priceMax",), ("price",)),
    "lat": (("venue", "lat"), ("venue", "latitude"), ("lat",), ("latitude",)),
    "lng": (("venue", "lng"), ("venue", "longitude"), ("lng",), ("longitude",)),
}

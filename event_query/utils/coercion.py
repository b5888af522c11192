"""Lenient value coercion for loosely-shaped input.

Raw event records and query strings arrive with no schema guarantees. These
helpers turn arbitrary values into text, floats and integers without ever
raising; anything that cannot be coerced becomes an empty string or None.
"""

import math
import re
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence, Tuple

# Leading float prefix: "12.5", "  -3", "50 TWD", ".5e2", "Infinity"
_LEADING_FLOAT_RE = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")

FieldPath = Tuple[str, ...]

_MISSING = object()


def lookup_path(record: Mapping[str, Any], path: Sequence[str]) -> Any:
    """Follow a key path through nested mappings.

    Returns None when any segment is missing or an intermediate value is not
    a mapping.

    Example:
        >>> lookup_path({"venue": {"name": "Hall"}}, ("venue", "name"))
        'Hall'
        >>> lookup_path({"venue": "Hall"}, ("venue", "name")) is None
        True
    """
    current: Any = record
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key, _MISSING)
        if current is _MISSING:
            return None
    return current


def first_present(
    record: Mapping[str, Any],
    paths: Iterable[FieldPath],
    accept: Callable[[Any], bool] = lambda value: value is not None,
) -> Any:
    """Return the value at the first path whose value is accepted.

    This is the single fallback helper shared by every field resolution. The
    default acceptance test is "present and not null"; text resolution passes
    a truthiness test instead so empty strings fall through.

    Args:
        record: Raw mapping to read from
        paths: Candidate key paths in priority order
        accept: Predicate deciding whether a candidate value wins

    Returns:
        The first accepted value, or None
    """
    for path in paths:
        value = lookup_path(record, path)
        if accept(value):
            return value
    return None


def to_text(value: Any) -> str:
    """Render a scalar as text; non-scalars and booleans become "".

    Example:
        >>> to_text(2024)
        '2024'
        >>> to_text(12.0)
        '12'
        >>> to_text({"a": 1})
        ''
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return ""
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return ""
        return str(int(value)) if value.is_integer() else repr(value)
    return ""


def is_text_candidate(value: Any) -> bool:
    """True if a value would render as non-empty text."""
    return bool(value) and to_text(value) != ""


def to_number(value: Any) -> Optional[float]:
    """Parse a value as a finite float, or None.

    Numbers are taken as-is; strings are parsed by their leading numeric
    prefix so "50 TWD" yields 50.0. Booleans, containers, NaN, infinities and
    integers beyond float range yield None.

    Example:
        >>> to_number("50 TWD")
        50.0
        >>> to_number("free") is None
        True
        >>> to_number(0)
        0.0
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        match = _LEADING_FLOAT_RE.match(value)
        if not match:
            return None
        number = float(match.group(1).replace("Infinity", "inf"))
    else:
        return None

    return number if math.isfinite(number) else None


def parse_leading_int(value: Any) -> Optional[int]:
    """Parse the leading base-10 integer of a value, or None.

    Example:
        >>> parse_leading_int("25 per page")
        25
        >>> parse_leading_int("-3")
        -3
        >>> parse_leading_int("abc") is None
        True
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else None

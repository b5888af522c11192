"""Weekday resolution for the weekday filter.

Accepts either a number 0-6 (0 = Sunday) or a Chinese day name such as
"三", "週三", "星期三", "禮拜天".
"""

import re
from typing import Any, Dict, Optional

# Day-name prefixes stripped before the trailing day glyph is looked up
WEEKDAY_PREFIXES = ("星期", "週", "禮拜")

_PREFIXED_INT_RE = re.compile(r"^0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)$")

WEEKDAY_GLYPHS: Dict[str, int] = {
    "日": 0,
    "天": 0,
    "一": 1,
    "二": 2,
    "三": 3,
    "四": 4,
    "五": 5,
    "六": 6,
}


def parse_weekday(value: Any) -> Optional[int]:
    """Resolve a weekday parameter to 0 (Sunday) through 6 (Saturday).

    Args:
        value: Raw parameter value

    Returns:
        Weekday number, or None when unspecified or unrecognized

    Example:
        >>> parse_weekday("3")
        3
        >>> parse_weekday("星期三")
        3
        >>> parse_weekday("禮拜天")
        0
        >>> parse_weekday("7") is None
        True
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None

    number = _as_integer(text)
    if number is not None and 0 <= number <= 6:
        return number

    for prefix in WEEKDAY_PREFIXES:
        text = text.replace(prefix, "")
    if not text:
        return None
    return WEEKDAY_GLYPHS.get(text[-1])


def _as_integer(text: str) -> Optional[int]:
    """Return text as an int if it is a whole number, else None.

    Accepts decimal notation ("3", "3.0", "3e0") and unsigned 0x, 0o and 0b
    literals ("0x3"). Digit separators ("0_3") and non-ASCII digits are
    rejected.
    """
    if "_" in text or not text.isascii():
        return None
    if _PREFIXED_INT_RE.match(text):
        return int(text, 0)
    try:
        number = float(text)
    except ValueError:
        return None
    if not number.is_integer():
        return None
    return int(number)

"""Duration parsing for the watcher poll interval."""

import re

_ISO_DURATION_RE = re.compile(r"^P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$")
_HUMAN_PART_RE = re.compile(r"(\d+)\s*([smhd])")

_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


class DurationParseError(ValueError):
    """Raised when a duration string cannot be parsed."""

    pass


def parse_duration(duration_str: str) -> int:
    """
    Parse a duration string to whole seconds.

    Supports human-readable values ("2s", "1m30s", "1h") and ISO-8601
    durations ("PT2S", "PT1M").

    Raises:
        DurationParseError: If the string is empty, malformed or zero

    Examples:
        >>> parse_duration("2s")
        2
        >>> parse_duration("PT1M")
        60
        >>> parse_duration("1m30s")
        90
    """
    text = duration_str.strip()
    if not text:
        raise DurationParseError("Duration string cannot be empty")

    if text.upper().startswith("P"):
        total = _parse_iso8601(text.upper())
    else:
        total = _parse_human_readable(text.lower())

    if total == 0:
        raise DurationParseError(f"Duration cannot be zero: '{duration_str}'")
    return total


def _parse_iso8601(text: str) -> int:
    match = _ISO_DURATION_RE.match(text)
    if not match:
        raise DurationParseError(
            f"Invalid ISO-8601 duration format: '{text}'. "
            "Expected format like 'PT2S', 'PT1M' or 'PT1H'"
        )
    days, hours, minutes, seconds = match.groups()
    return (
        int(days or 0) * 86400
        + int(hours or 0) * 3600
        + int(minutes or 0) * 60
        + int(float(seconds or 0))
    )


def _parse_human_readable(text: str) -> int:
    parts = _HUMAN_PART_RE.findall(text)
    if not parts:
        raise DurationParseError(
            f"Invalid duration format: '{text}'. Expected format like '2s', '1m' or '1m30s'"
        )
    if "".join(f"{num}{unit}" for num, unit in parts) != re.sub(r"\s+", "", text):
        raise DurationParseError(
            f"Invalid characters in duration: '{text}'. "
            "Use only digits and units: s, m, h, d"
        )
    return sum(int(num) * _UNIT_SECONDS[unit] for num, unit in parts)


def validate_duration_range(
    duration_seconds: int,
    min_seconds: int = 1,
    max_seconds: int = 3600,
) -> None:
    """
    Validate that a duration lies within [min_seconds, max_seconds].

    Raises:
        DurationParseError: If the duration is outside the range
    """
    if duration_seconds < min_seconds:
        raise DurationParseError(
            f"Poll interval too short: {duration_seconds}s. Minimum is {min_seconds}s."
        )
    if duration_seconds > max_seconds:
        raise DurationParseError(
            f"Poll interval too long: {duration_seconds}s. Maximum is {max_seconds}s."
        )

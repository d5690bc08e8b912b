"""Time-of-day parsing and conversion helpers.

Times arrive in mixed forms: strict 24-hour ``HH:MM`` from the admin UI and
newer bookings, and ``5:30 PM`` style values from legacy records. Everything
that reads a stored or user-entered time goes through
:func:`normalize_time_string` before trusting it.

The numeric domain is minutes since midnight, ``0..1439``.
"""

import re
from collections.abc import Iterable, Mapping
from typing import Any

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE = MINUTES_PER_DAY - 1

_TIME_24H_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")
_TIME_12H_RE = re.compile(r"^(\d{1,2}):([0-5]\d)\s*([AaPp][Mm])$")


def normalize_time_string(value: Any) -> str | None:
    """Normalize a time string to 24-hour ``HH:MM``.

    Accepts strict ``HH:MM`` (returned unchanged) or a 12-hour time with an
    AM/PM marker (``"5:30 PM"``, ``"05:30 pm"``, ``"12:00AM"``). Returns None
    for anything else, never raises.

    Examples:
        >>> normalize_time_string("14:45")
        '14:45'
        >>> normalize_time_string("2:45 PM")
        '14:45'
        >>> normalize_time_string("12:15 am")
        '00:15'
        >>> normalize_time_string("25:00") is None
        True
    """
    if not isinstance(value, str):
        return None

    candidate = value.strip()
    if _TIME_24H_RE.match(candidate):
        return candidate

    match = _TIME_12H_RE.match(candidate)
    if not match:
        return None

    hours = int(match.group(1))
    minutes = int(match.group(2))
    marker = match.group(3).upper()
    if not 1 <= hours <= 12:
        return None

    if marker == "AM":
        hours = 0 if hours == 12 else hours
    else:
        hours = 12 if hours == 12 else hours + 12

    return f"{hours:02d}:{minutes:02d}"


def time_to_minutes(value: str) -> int:
    """Convert a normalized ``HH:MM`` string to minutes since midnight.

    Raises:
        ValueError: if the value is not strict 24-hour ``HH:MM``.
    """
    match = _TIME_24H_RE.match(value) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Expected HH:MM time, got {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_to_time(minutes: int) -> str:
    """Convert minutes since midnight to ``HH:MM``, clamping into the day."""
    minutes = max(0, min(LAST_MINUTE, int(minutes)))
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def to_12_hour(value: Any) -> str | None:
    """Render a time as ``h:MM AM/PM`` for customer-facing text.

    Examples:
        >>> to_12_hour("14:45")
        '2:45 PM'
        >>> to_12_hour("00:30")
        '12:30 AM'
    """
    normalized = normalize_time_string(value)
    if normalized is None:
        return None

    hours, minutes = divmod(time_to_minutes(normalized), 60)
    marker = "AM" if hours < 12 else "PM"
    display_hour = hours % 12 or 12
    return f"{display_hour}:{minutes:02d} {marker}"


def normalize_time_range(time_range: Mapping[str, Any]) -> tuple[str, str] | None:
    """Normalize both ends of a ``{"start": ..., "end": ...}`` range.

    Returns None if either end fails to normalize. Ordering is not checked.
    """
    if not isinstance(time_range, Mapping):
        return None
    start = normalize_time_string(time_range.get("start"))
    end = normalize_time_string(time_range.get("end"))
    if start is None or end is None:
        return None
    return start, end


class InvalidTimeRangeError(ValueError):
    """A time range failed normalization or has start >= end."""

    pass


def validate_time_ranges(time_ranges: Iterable[Mapping[str, Any]]) -> list[dict[str, str]]:
    """Normalize a list of ranges for storage, rejecting the whole list on any bad range.

    Raises:
        InvalidTimeRangeError: if any range has an unparseable end or start >= end.
    """
    validated: list[dict[str, str]] = []
    for index, time_range in enumerate(time_ranges):
        normalized = normalize_time_range(time_range)
        if normalized is None:
            raise InvalidTimeRangeError(
                f"Time range {index + 1} has an invalid time: {time_range!r}"
            )
        start, end = normalized
        if time_to_minutes(start) >= time_to_minutes(end):
            raise InvalidTimeRangeError(
                f"Time range {index + 1} must start before it ends: {start} - {end}"
            )
        validated.append({"start": start, "end": end})
    return validated

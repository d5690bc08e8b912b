"""Pydantic schema for a time-of-day range."""

import logging
from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, Field

from ridebook.utils.time_format import normalize_time_range, time_to_minutes

logger = logging.getLogger(__name__)


class TimeRange(BaseModel):
    """A start/end pair of times of day.

    Values are accepted as entered ("09:00", "9:00 AM"); the schedule and
    date exception services normalize and validate them.
    """

    start: str = Field(..., description="Range start (HH:MM or h:MM AM/PM)")
    end: str = Field(..., description="Range end, inclusive (HH:MM or h:MM AM/PM)")


def usable_time_ranges(value: Any) -> list[dict[str, str]]:
    """Normalize stored ranges for a response, dropping the ones that can't be used.

    Rows written before validation existed may hold unparseable or inverted
    ranges. Those are left out (with a warning) instead of failing the whole
    response.
    """
    if not isinstance(value, Iterable) or isinstance(value, (str, bytes)):
        return []

    ranges: list[dict[str, str]] = []
    for time_range in value:
        if isinstance(time_range, TimeRange):
            time_range = time_range.model_dump()
        normalized = normalize_time_range(time_range)
        if normalized is None or time_to_minutes(normalized[0]) >= time_to_minutes(normalized[1]):
            logger.warning(f"Omitting unusable stored time range: {time_range!r}")
            continue
        start, end = normalized
        ranges.append({"start": start, "end": end})
    return ranges

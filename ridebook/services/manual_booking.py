"""Manual booking service - reads of admin-created blocked ranges."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ridebook.models import ManualBooking
from ridebook.utils.time_format import (
    InvalidTimeRangeError,
    normalize_time_string,
    time_to_minutes,
)

logger = logging.getLogger(__name__)


async def list_active_manual_bookings(db: AsyncSession, on_date: date) -> list[ManualBooking]:
    """List active manual bookings on a date."""
    result = await db.execute(
        select(ManualBooking)
        .where(
            ManualBooking.date == on_date,
            ManualBooking.is_active == True,
        )
        .order_by(ManualBooking.start_time)
    )
    return list(result.scalars().all())


async def has_time_conflict(
    db: AsyncSession,
    on_date: date,
    start_time: str,
    end_time: str,
    exclude_id: UUID | None = None,
) -> bool:
    """Check whether [start_time, end_time) overlaps an active manual booking.

    Stored rows whose times do not normalize are skipped with a warning.

    Raises:
        InvalidTimeRangeError: if either time is invalid or start is not before end.
    """
    start = normalize_time_string(start_time)
    end = normalize_time_string(end_time)
    if start is None or end is None:
        raise InvalidTimeRangeError(f"Invalid time range: {start_time!r} - {end_time!r}")
    new_start, new_end = time_to_minutes(start), time_to_minutes(end)
    if new_start >= new_end:
        raise InvalidTimeRangeError(f"Time range must start before it ends: {start} - {end}")

    for manual_booking in await list_active_manual_bookings(db, on_date):
        if exclude_id and manual_booking.id == exclude_id:
            continue
        existing_start = normalize_time_string(manual_booking.start_time)
        existing_end = normalize_time_string(manual_booking.end_time)
        if existing_start is None or existing_end is None:
            logger.warning(
                f"Skipping manual booking {manual_booking.id} with unparseable times: "
                f"{manual_booking.start_time!r} - {manual_booking.end_time!r}"
            )
            continue
        if time_to_minutes(existing_start) < new_end and new_start < time_to_minutes(existing_end):
            return True

    return False

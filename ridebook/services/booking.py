"""Booking service - the reads availability needs, and slot claiming."""

import logging
from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ridebook.models import Booking, BookingStatus
from ridebook.utils.time_format import to_12_hour

if TYPE_CHECKING:
    from ridebook.services.availability import AvailabilityService

logger = logging.getLogger(__name__)


class SlotUnavailableError(Exception):
    """The requested pickup slot is not available."""

    pass


async def list_blocking_bookings(
    db: AsyncSession,
    pickup_date: date,
    exclude_booking_id: UUID | None = None,
) -> list[Booking]:
    """List bookings that occupy capacity on a date (anything not cancelled).

    Args:
        db: Database session
        pickup_date: Date to scan
        exclude_booking_id: Booking to leave out, e.g. the one being edited

    Returns:
        Bookings ordered by pickup time as stored
    """
    query = select(Booking).where(
        Booking.pickup_date == pickup_date,
        Booking.status != BookingStatus.CANCELLED.value,
    )

    if exclude_booking_id:
        query = query.where(Booking.id != exclude_booking_id)

    result = await db.execute(query.order_by(Booking.pickup_time))
    return list(result.scalars().all())


async def claim_time_slot(
    db: AsyncSession, booking: Booking, availability: "AvailabilityService"
) -> None:
    """Confirm a booking's own pickup slot is still free.

    The booking is excluded from its own check so an existing reservation can
    be re-validated after an edit. This does not lock anything: two requests
    racing for the same slot can both pass.

    Raises:
        SlotUnavailableError: if the slot is taken or outside bookable hours.
    """
    logger.info(
        f"Claiming slot {booking.pickup_date} {booking.pickup_time} for booking {booking.id}"
    )
    is_available = await availability.is_time_available(
        booking.pickup_date, booking.pickup_time, exclude_booking_id=booking.id
    )
    if not is_available:
        display_time = to_12_hour(booking.pickup_time) or booking.pickup_time
        raise SlotUnavailableError(
            f"Pickup time {display_time} on {booking.pickup_date:%B %d, %Y} is not available"
        )

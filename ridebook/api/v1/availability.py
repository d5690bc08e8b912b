"""Availability API endpoints - open pickup slots and the weekly schedule."""

import logging
from datetime import date
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ridebook.api.deps import get_availability_service, get_db
from ridebook.models import WeekdaySchedule
from ridebook.schemas.availability import (
    AvailabilityCheckResponse,
    AvailableSlotsResponse,
    ScheduleResponse,
    WeekdayScheduleUpdate,
)
from ridebook.schemas.date_exception import DateExceptionResponse
from ridebook.services import schedule as schedule_service
from ridebook.services.availability import AvailabilityService
from ridebook.utils.time_format import normalize_time_string

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/availability", tags=["availability"])

STORE_UNAVAILABLE_DETAIL = "Availability is temporarily unavailable. Please try again."


@router.get(
    "/time-slots",
    response_model=AvailableSlotsResponse,
    summary="Get available pickup times",
)
async def get_available_time_slots(
    availability: Annotated[AvailabilityService, Depends(get_availability_service)],
    on_date: Annotated[date, Query(alias="date", description="Pickup date (YYYY-MM-DD)")],
    exclude_booking_id: Annotated[
        UUID | None, Query(description="Booking being edited, ignored when blocking")
    ] = None,
) -> AvailableSlotsResponse:
    """List bookable pickup times for a date.

    ``closed`` is true when the date is shut (closure, disabled weekday,
    past date). A store failure is a 503, never an empty list.
    """
    try:
        result = await availability.get_available_slots(
            on_date, exclude_booking_id=exclude_booking_id
        )
    except SQLAlchemyError as e:
        logger.error(f"Slot lookup failed for {on_date}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=STORE_UNAVAILABLE_DETAIL,
        ) from e

    exception = (
        DateExceptionResponse.model_validate(result.exception) if result.exception else None
    )
    return AvailableSlotsResponse(
        date=on_date, slots=result.slots, closed=result.closed, exception=exception
    )


@router.get(
    "/check",
    response_model=AvailabilityCheckResponse,
    summary="Check one pickup time",
)
async def check_availability(
    availability: Annotated[AvailabilityService, Depends(get_availability_service)],
    on_date: Annotated[date, Query(alias="date", description="Pickup date (YYYY-MM-DD)")],
    pickup_time: Annotated[str, Query(alias="time", description="HH:MM or h:MM AM/PM")],
    exclude_booking_id: Annotated[UUID | None, Query()] = None,
) -> AvailabilityCheckResponse:
    """Check whether a single pickup time can be booked."""
    normalized = normalize_time_string(pickup_time)
    if normalized is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid time format. Use HH:MM",
        )

    try:
        is_available = await availability.is_time_available(
            on_date, normalized, exclude_booking_id=exclude_booking_id
        )
    except SQLAlchemyError as e:
        logger.error(f"Availability check failed for {on_date} {normalized}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=STORE_UNAVAILABLE_DETAIL,
        ) from e

    return AvailabilityCheckResponse(date=on_date, time=normalized, is_available=is_available)


@router.get(
    "/schedule",
    response_model=list[ScheduleResponse],
    summary="Get the weekly schedule",
)
async def get_schedule(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[WeekdaySchedule]:
    """Get the booking hours for every configured weekday."""
    return await schedule_service.list_schedules(db)


@router.put(
    "/schedule",
    response_model=ScheduleResponse,
    summary="Update one weekday",
)
async def update_schedule(
    schedule_data: WeekdayScheduleUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WeekdaySchedule:
    """Update (or create) the booking hours for one weekday."""
    try:
        schedule = await schedule_service.update_schedule(
            db, schedule_data.day_of_week, schedule_data
        )
    except schedule_service.ScheduleValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    await db.commit()
    return schedule


@router.post(
    "/schedule/reset",
    response_model=list[ScheduleResponse],
    summary="Open every weekday 24/7",
)
async def reset_schedule(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> list[WeekdaySchedule]:
    """Reset all seven weekdays to 00:00-23:59."""
    schedules = await schedule_service.reset_schedule(db)
    await db.commit()
    return schedules

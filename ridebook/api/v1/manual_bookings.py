"""Manual booking API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ridebook.api.deps import get_db
from ridebook.schemas.manual_booking import (
    ManualBookingConflictCheck,
    ManualBookingConflictResponse,
)
from ridebook.services import manual_booking as manual_booking_service
from ridebook.utils.time_format import InvalidTimeRangeError

router = APIRouter(prefix="/manual-bookings", tags=["manual-bookings"])


@router.post(
    "/check-conflict",
    response_model=ManualBookingConflictResponse,
    summary="Check a block against existing manual bookings",
)
async def check_time_conflict(
    check: ManualBookingConflictCheck,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ManualBookingConflictResponse:
    """Check whether a proposed block overlaps an active manual booking."""
    try:
        has_conflict = await manual_booking_service.has_time_conflict(
            db,
            check.date,
            check.start_time,
            check.end_time,
            exclude_id=check.exclude_id,
        )
    except InvalidTimeRangeError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return ManualBookingConflictResponse(has_conflict=has_conflict)

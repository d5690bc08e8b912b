"""Date exception service - closures and special hours for specific dates."""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ridebook.models import DateException, DateExceptionType
from ridebook.schemas.date_exception import DateExceptionCreate, DateExceptionUpdate
from ridebook.utils.time_format import InvalidTimeRangeError, validate_time_ranges

logger = logging.getLogger(__name__)

RANGED_TYPES = (DateExceptionType.CUSTOM_HOURS.value, DateExceptionType.BLOCKED_HOURS.value)


class DateExceptionNotFoundError(Exception):
    """No date exception with the given ID."""

    pass


class DateExceptionConflictError(Exception):
    """A date exception already exists for that date."""

    pass


class DateExceptionValidationError(ValueError):
    """Date exception data is inconsistent or has a bad time range."""

    pass


def _validated_ranges(time_ranges: list[dict]) -> list[dict[str, str]]:
    try:
        return validate_time_ranges(time_ranges)
    except InvalidTimeRangeError as e:
        raise DateExceptionValidationError(str(e)) from e


async def get_date_exception(db: AsyncSession, exception_id: UUID) -> DateException:
    """Get a date exception by ID.

    Raises:
        DateExceptionNotFoundError: if it does not exist.
    """
    exception = await db.get(DateException, exception_id)
    if exception is None:
        raise DateExceptionNotFoundError(f"Date exception {exception_id} not found")
    return exception


async def get_date_exception_by_date(db: AsyncSession, on_date: date) -> DateException | None:
    """Get the exception for a calendar date, if any."""
    result = await db.execute(select(DateException).where(DateException.date == on_date))
    return result.scalar_one_or_none()


async def list_date_exceptions(
    db: AsyncSession,
    start_date: date | None = None,
    end_date: date | None = None,
    is_enabled: bool | None = None,
    skip: int = 0,
    limit: int = 100,
) -> list[DateException]:
    """List date exceptions with optional filters, ordered by date."""
    query = select(DateException)

    if start_date:
        query = query.where(DateException.date >= start_date)

    if end_date:
        query = query.where(DateException.date <= end_date)

    if is_enabled is not None:
        query = query.where(DateException.is_enabled == is_enabled)

    result = await db.execute(query.order_by(DateException.date).offset(skip).limit(limit))
    return list(result.scalars().all())


async def list_upcoming_date_exceptions(
    db: AsyncSession, today: date, limit: int = 10
) -> list[DateException]:
    """List exceptions from today onwards."""
    result = await db.execute(
        select(DateException)
        .where(DateException.date >= today)
        .order_by(DateException.date)
        .limit(limit)
    )
    return list(result.scalars().all())


async def create_date_exception(
    db: AsyncSession, exception_data: DateExceptionCreate
) -> DateException:
    """Create a date exception.

    Raises:
        DateExceptionConflictError: if the date already has one.
        DateExceptionValidationError: on a bad time range.
    """
    if await get_date_exception_by_date(db, exception_data.date):
        raise DateExceptionConflictError(
            f"An exception already exists for {exception_data.date.isoformat()}"
        )

    time_ranges = [r.model_dump() for r in exception_data.time_ranges]
    if exception_data.type in RANGED_TYPES:
        time_ranges = _validated_ranges(time_ranges)
    else:
        time_ranges = []

    exception = DateException(
        date=exception_data.date,
        is_enabled=exception_data.is_enabled,
        type=exception_data.type,
        reason=exception_data.reason,
        time_ranges=time_ranges,
    )
    db.add(exception)
    await db.flush()
    await db.refresh(exception)
    logger.info(f"Created date exception for {exception.date}: type={exception.type}")
    return exception


async def update_date_exception(
    db: AsyncSession, exception: DateException, exception_data: DateExceptionUpdate
) -> DateException:
    """Update a date exception.

    Supplying time ranges switches the type to custom hours unless the update
    explicitly asks for blocked hours. Custom and blocked hours can never be
    left without ranges.

    Raises:
        DateExceptionConflictError: if moved onto a date that already has one.
        DateExceptionValidationError: on inconsistent type/ranges.
    """
    update_dict = exception_data.model_dump(exclude_unset=True)

    new_date = update_dict.get("date")
    if new_date is not None and new_date != exception.date:
        existing = await get_date_exception_by_date(db, new_date)
        if existing is not None and existing.id != exception.id:
            raise DateExceptionConflictError(
                f"An exception already exists for {new_date.isoformat()}"
            )

    time_ranges = update_dict.get("time_ranges")
    if time_ranges:
        update_dict["time_ranges"] = _validated_ranges(time_ranges)
        if update_dict.get("type") != DateExceptionType.BLOCKED_HOURS.value:
            update_dict["type"] = DateExceptionType.CUSTOM_HOURS.value
    else:
        new_type = update_dict.get("type") or exception.type
        if new_type in RANGED_TYPES and (
            "time_ranges" in update_dict or update_dict.get("type") is not None
        ):
            raise DateExceptionValidationError(
                f"type '{new_type}' requires at least one time range"
            )

    for key, value in update_dict.items():
        if value is None and key != "reason":
            continue
        setattr(exception, key, value)

    await db.flush()
    await db.refresh(exception)
    return exception


async def delete_date_exception(db: AsyncSession, exception: DateException) -> None:
    """Delete a date exception."""
    await db.delete(exception)
    await db.flush()

"""Schedule service - the recurring weekly booking hours."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ridebook.models import WeekdaySchedule
from ridebook.schemas.availability import ScheduleUpdate
from ridebook.utils.time_format import InvalidTimeRangeError, validate_time_ranges

logger = logging.getLogger(__name__)

ALWAYS_OPEN_RANGES: list[dict[str, str]] = [{"start": "00:00", "end": "23:59"}]


class ScheduleValidationError(ValueError):
    """Schedule update rejected; nothing was persisted."""

    pass


async def get_weekday_schedule(db: AsyncSession, day_of_week: int) -> WeekdaySchedule | None:
    """Get the schedule for a weekday (0=Sunday)."""
    result = await db.execute(
        select(WeekdaySchedule).where(WeekdaySchedule.day_of_week == day_of_week)
    )
    return result.scalar_one_or_none()


async def list_schedules(db: AsyncSession) -> list[WeekdaySchedule]:
    """Get the full weekly schedule, Sunday first."""
    result = await db.execute(select(WeekdaySchedule).order_by(WeekdaySchedule.day_of_week))
    return list(result.scalars().all())


async def update_schedule(
    db: AsyncSession, day_of_week: int, schedule_data: ScheduleUpdate
) -> WeekdaySchedule:
    """Create or update the schedule for one weekday.

    Every range is normalized and must satisfy start < end. A single bad
    range rejects the whole update.

    Raises:
        ScheduleValidationError: on an invalid weekday or time range.
    """
    if not 0 <= day_of_week <= 6:
        raise ScheduleValidationError(f"day_of_week must be 0-6, got {day_of_week}")

    update_dict = schedule_data.model_dump(
        exclude_unset=True, include={"time_ranges", "is_enabled"}
    )
    if update_dict.get("time_ranges") is not None:
        try:
            update_dict["time_ranges"] = validate_time_ranges(update_dict["time_ranges"])
        except InvalidTimeRangeError as e:
            raise ScheduleValidationError(str(e)) from e
    else:
        update_dict.pop("time_ranges", None)
    if update_dict.get("is_enabled") is None:
        update_dict.pop("is_enabled", None)

    schedule = await get_weekday_schedule(db, day_of_week)
    if schedule is None:
        schedule = WeekdaySchedule(day_of_week=day_of_week, **update_dict)
        db.add(schedule)
        logger.info(f"Created schedule for day {day_of_week}: {update_dict}")
    else:
        for key, value in update_dict.items():
            setattr(schedule, key, value)
        logger.info(f"Updated schedule for day {day_of_week}: {update_dict}")

    await db.flush()
    await db.refresh(schedule)
    return schedule


async def reset_schedule(db: AsyncSession) -> list[WeekdaySchedule]:
    """Open every weekday around the clock (00:00-23:59)."""
    for day_of_week in range(7):
        await update_schedule(
            db,
            day_of_week,
            ScheduleUpdate(time_ranges=ALWAYS_OPEN_RANGES, is_enabled=True),
        )
    logger.info("Reset all weekdays to 24/7 availability")
    return await list_schedules(db)

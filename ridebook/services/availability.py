"""Availability service - which pickup times can be booked on a date.

This is THE core booking algorithm. For a date it:
1. Resolves the effective day schedule (a date exception overrides the
   weekday schedule)
2. Generates the fixed grid of candidate ticks (every 30 minutes)
3. Blocks ticks around existing bookings and inside manual bookings
4. Drops ticks that are too soon when the date is today
5. Keeps ticks inside the allowed ranges

All dates and times are naive wall-clock values in the business timezone.
Stored records with unparseable times are skipped with a warning so one
bad row never blanks out a whole day.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ridebook.config import get_settings
from ridebook.models import DateException, DateExceptionType
from ridebook.services import booking as booking_service
from ridebook.services import date_exception as date_exception_service
from ridebook.services import manual_booking as manual_booking_service
from ridebook.services import schedule as schedule_service
from ridebook.utils.clock import local_now
from ridebook.utils.time_format import (
    LAST_MINUTE,
    MINUTES_PER_DAY,
    minutes_to_time,
    normalize_time_range,
    normalize_time_string,
    time_to_minutes,
)

logger = logging.getLogger(__name__)

MinuteRange = tuple[int, int]


class InvalidDateError(ValueError):
    """The requested date could not be parsed."""

    pass


@dataclass(frozen=True)
class BlockingPolicy:
    """Slot grid and buffer settings used by the engine."""

    slot_interval_minutes: int = 30
    buffer_before_minutes: int = 30
    buffer_after_minutes: int = 60
    same_day_cutoff_minutes: int = 120
    max_advance_days: int | None = 90

    @classmethod
    def from_settings(cls) -> "BlockingPolicy":
        """Build the policy from application settings."""
        settings = get_settings()
        return cls(
            slot_interval_minutes=settings.slot_interval_minutes,
            buffer_before_minutes=settings.booking_buffer_before_minutes,
            buffer_after_minutes=settings.booking_buffer_after_minutes,
            same_day_cutoff_minutes=settings.same_day_cutoff_minutes,
            max_advance_days=settings.max_advance_days,
        )

    def booking_window(self, pickup_minutes: int) -> MinuteRange:
        """Inclusive span a pickup at this minute keeps off the books."""
        return (
            max(0, pickup_minutes - self.buffer_before_minutes),
            min(LAST_MINUTE, pickup_minutes + self.buffer_after_minutes),
        )

    def grid(self) -> list[int]:
        """Candidate ticks for a day, in minutes since midnight."""
        return list(range(0, MINUTES_PER_DAY, self.slot_interval_minutes))


# Effective day schedule variants


@dataclass(frozen=True)
class ClosedDay:
    """No bookings at all on this date."""

    exception: DateException | None = None


@dataclass(frozen=True)
class CustomHours:
    """A date exception replaces the weekday hours."""

    time_ranges: list[dict[str, Any]]
    exception: DateException


@dataclass(frozen=True)
class WeekdayDefault:
    """The recurring weekday hours apply, minus any blocked-hours exception."""

    time_ranges: list[dict[str, Any]]
    blocked_ranges: list[dict[str, Any]] = field(default_factory=list)
    exception: DateException | None = None


DaySchedule = ClosedDay | CustomHours | WeekdayDefault


@dataclass
class AvailableSlots:
    """Result of a slot lookup.

    ``closed`` is True when the day itself is shut (closed exception, no or
    disabled weekday schedule, past date), as opposed to every slot being
    taken.
    """

    slots: list[str]
    exception: DateException | None = None
    closed: bool = False


def day_of_week_for(on_date: date) -> int:
    """Weekday index with Sunday=0 ... Saturday=6."""
    return on_date.isoweekday() % 7


def coerce_date(value: date | str) -> date:
    """Accept a date or an ISO ``YYYY-MM-DD`` string.

    Raises:
        InvalidDateError: if the value is not a valid date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise InvalidDateError(f"Invalid date {value!r}. Use YYYY-MM-DD")


def _normalize_ranges(time_ranges: Iterable[Any], source: str) -> list[MinuteRange]:
    """Convert stored ranges to minutes, dropping unusable ones."""
    ranges: list[MinuteRange] = []
    for time_range in time_ranges or []:
        normalized = normalize_time_range(time_range)
        if normalized is None:
            logger.warning(f"Skipping unparseable time range in {source}: {time_range!r}")
            continue
        start, end = (time_to_minutes(t) for t in normalized)
        if start >= end:
            logger.warning(
                f"Skipping time range in {source} that ends before it starts: {time_range!r}"
            )
            continue
        ranges.append((start, end))
    return ranges


def _in_any(minute: int, ranges: Iterable[MinuteRange]) -> bool:
    return any(start <= minute <= end for start, end in ranges)


class AvailabilityService:
    """Computes bookable pickup times from the schedule and booking stores.

    Instances hold no state between calls; every call re-reads the stores.

    Usage:
        service = AvailabilityService(db)
        result = await service.get_available_slots(date(2026, 5, 6))
        ok = await service.is_time_available("2026-05-06", "5:30 PM")
    """

    def __init__(
        self,
        db: AsyncSession,
        policy: BlockingPolicy | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.db = db
        self.policy = policy or BlockingPolicy.from_settings()
        self.clock = clock or local_now

    async def get_day_schedule(self, on_date: date | str) -> DaySchedule:
        """Resolve which hours apply on a date.

        An exception fully overrides the weekday schedule: a disabled one
        closes the day, an enabled custom-hours one replaces the hours.
        """
        on_date = coerce_date(on_date)
        exception = await date_exception_service.get_date_exception_by_date(self.db, on_date)

        if exception is not None and not exception.is_enabled:
            return ClosedDay(exception=exception)

        if (
            exception is not None
            and exception.type == DateExceptionType.CUSTOM_HOURS.value
            and exception.time_ranges
        ):
            return CustomHours(time_ranges=list(exception.time_ranges), exception=exception)

        schedule = await schedule_service.get_weekday_schedule(self.db, day_of_week_for(on_date))
        if schedule is None or not schedule.is_enabled:
            return ClosedDay(exception=exception)

        blocked_ranges: list[dict[str, Any]] = []
        if exception is not None and exception.type == DateExceptionType.BLOCKED_HOURS.value:
            blocked_ranges = list(exception.time_ranges or [])

        return WeekdayDefault(
            time_ranges=list(schedule.time_ranges or []),
            blocked_ranges=blocked_ranges,
            exception=exception,
        )

    def _allowed_and_blocked(
        self, day: DaySchedule, on_date: date
    ) -> tuple[list[MinuteRange], list[MinuteRange]]:
        """Normalized allowed ranges and blocked-hours ranges for a resolved day."""
        if isinstance(day, ClosedDay):
            return [], []
        if isinstance(day, CustomHours):
            return _normalize_ranges(day.time_ranges, f"date exception {on_date}"), []
        if isinstance(day, WeekdayDefault):
            source = f"schedule for weekday {day_of_week_for(on_date)}"
            return (
                _normalize_ranges(day.time_ranges, source),
                _normalize_ranges(day.blocked_ranges, f"blocked hours on {on_date}"),
            )
        raise TypeError(f"Unhandled day schedule: {day!r}")

    def _outside_horizon(self, on_date: date, today: date) -> bool:
        if on_date < today:
            return True
        max_days = self.policy.max_advance_days
        return max_days is not None and on_date > today + timedelta(days=max_days)

    def _is_too_soon(self, on_date: date, minute: int, now: datetime) -> bool:
        """Same-day ticks at or before now + cutoff can't be booked."""
        if on_date != now.date():
            return False
        tick = datetime.combine(on_date, time(minute // 60, minute % 60))
        return tick <= now + timedelta(minutes=self.policy.same_day_cutoff_minutes)

    async def _booking_windows(
        self, on_date: date, exclude_booking_id: UUID | None
    ) -> list[MinuteRange]:
        windows: list[MinuteRange] = []
        bookings = await booking_service.list_blocking_bookings(
            self.db, on_date, exclude_booking_id=exclude_booking_id
        )
        for booking in bookings:
            pickup = normalize_time_string(booking.pickup_time)
            if pickup is None:
                logger.warning(
                    f"Skipping booking {booking.id} with unparseable pickup time {booking.pickup_time!r}"
                )
                continue
            windows.append(self.policy.booking_window(time_to_minutes(pickup)))
        return windows

    async def _manual_ranges(self, on_date: date) -> list[MinuteRange]:
        ranges: list[MinuteRange] = []
        for manual_booking in await manual_booking_service.list_active_manual_bookings(
            self.db, on_date
        ):
            start = normalize_time_string(manual_booking.start_time)
            end = normalize_time_string(manual_booking.end_time)
            if start is None or end is None:
                logger.warning(
                    f"Skipping manual booking {manual_booking.id} with unparseable times: "
                    f"{manual_booking.start_time!r} - {manual_booking.end_time!r}"
                )
                continue
            ranges.append((time_to_minutes(start), time_to_minutes(end)))
        return ranges

    async def get_available_slots(
        self, on_date: date | str, exclude_booking_id: UUID | None = None
    ) -> AvailableSlots:
        """Calculate every bookable pickup time on a date.

        Args:
            on_date: Date to check (date or YYYY-MM-DD)
            exclude_booking_id: Booking that must not block itself (editing)

        Returns:
            AvailableSlots with ascending HH:MM ticks and the date's exception

        Raises:
            InvalidDateError: if on_date is not a valid date.
        """
        on_date = coerce_date(on_date)
        now = self.clock()

        if self._outside_horizon(on_date, now.date()):
            logger.info(f"Date {on_date} is outside the booking horizon")
            return AvailableSlots(slots=[], closed=True)

        day = await self.get_day_schedule(on_date)
        if isinstance(day, ClosedDay):
            return AvailableSlots(slots=[], exception=day.exception, closed=True)

        allowed, blocked_hours = self._allowed_and_blocked(day, on_date)
        if not allowed:
            logger.info(f"No usable time ranges on {on_date}")
            return AvailableSlots(slots=[], exception=day.exception, closed=True)

        blocked: set[int] = set()
        grid = self.policy.grid()
        windows = (
            blocked_hours
            + await self._booking_windows(on_date, exclude_booking_id)
            + await self._manual_ranges(on_date)
        )
        for tick in grid:
            if _in_any(tick, windows):
                blocked.add(tick)

        slots = [
            minutes_to_time(tick)
            for tick in grid
            if _in_any(tick, allowed)
            and tick not in blocked
            and not self._is_too_soon(on_date, tick, now)
        ]
        logger.debug(f"{len(slots)} slots available on {on_date} ({len(blocked)} ticks blocked)")
        return AvailableSlots(slots=slots, exception=day.exception)

    async def is_time_available(
        self,
        on_date: date | str,
        pickup_time: str,
        exclude_booking_id: UUID | None = None,
    ) -> bool:
        """Check whether one pickup time can be booked.

        Returns False (never raises) when the time does not parse.

        Raises:
            InvalidDateError: if on_date is not a valid date.
        """
        on_date = coerce_date(on_date)
        normalized = normalize_time_string(pickup_time)
        if normalized is None:
            logger.info(f"Rejecting unparseable pickup time {pickup_time!r}")
            return False
        minute = time_to_minutes(normalized)
        now = self.clock()

        if self._outside_horizon(on_date, now.date()):
            return False

        day = await self.get_day_schedule(on_date)
        if isinstance(day, ClosedDay):
            return False

        allowed, blocked_hours = self._allowed_and_blocked(day, on_date)
        if not _in_any(minute, allowed):
            return False
        if _in_any(minute, blocked_hours):
            return False

        if self._is_too_soon(on_date, minute, now):
            return False

        if _in_any(minute, await self._booking_windows(on_date, exclude_booking_id)):
            return False
        if _in_any(minute, await self._manual_ranges(on_date)):
            return False

        return True

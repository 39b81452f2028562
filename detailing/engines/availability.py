"""
Slot availability for a booking date.

Three steps per request: weekday check -> slot generation -> booking overlay.
Nothing is stored here; booked times are read from the booking store (through
an optional short-lived cache) on every call.

If the store cannot be read, the engine fails open: every generated slot is
returned as available and the result is marked ``degraded``. Double-booking
is then prevented, if at all, by the store's own uniqueness rule.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Optional, Union

from detailing.config import ScheduleConfig, settings
from detailing.logging_context import get_request_logger
from detailing.schemas.booking_schema import SlotAvailability, TimeSlot
from detailing.store.booking_store import BookingStore, BookingStoreUnavailable
from detailing.store.cache import ReadThroughCache
from detailing.utils import format_time_label

logger = get_request_logger(__name__)

MAX_DATE_SCAN_DAYS = 366


@dataclass(frozen=True)
class BookedTimes:
    """Successful store read."""

    times: tuple[str, ...]


@dataclass(frozen=True)
class BookingFetchFailed:
    """Store read failed; the caller takes the fail-open branch."""

    reason: str


BookingFetchResult = Union[BookedTimes, BookingFetchFailed]


def weekday_index(target: date) -> int:
    """Day of week with 0=Sunday through 6=Saturday."""
    return (target.weekday() + 1) % 7


def is_working_day(target: date, working_days: Iterable[int]) -> bool:
    return weekday_index(target) in set(working_days)


def is_within_booking_window(
    target: date, today: date, schedule: ScheduleConfig = settings.schedule
) -> bool:
    """Check the date respects minimum notice and the advance-booking limit."""
    earliest = today + timedelta(days=schedule.min_notice_days)
    latest = today + timedelta(days=schedule.advance_booking_days)
    return earliest <= target <= latest


def generate_daily_slots(slot_times: Iterable[str]) -> list[TimeSlot]:
    """Build the day's ordered slot list, one slot per distinct time string."""
    slots: list[TimeSlot] = []
    seen: set[str] = set()
    for slot_time in slot_times:
        if slot_time in seen:
            continue
        seen.add(slot_time)
        slots.append(TimeSlot(time=slot_time, label=format_time_label(slot_time)))
    return slots


def overlay_bookings(slots: list[TimeSlot], booked_times: Iterable[str]) -> list[TimeSlot]:
    """Mark every slot whose time is booked as unavailable."""
    counts = Counter(booked_times)
    return [
        slot.model_copy(
            update={
                "is_available": counts[slot.time] == 0,
                "booking_count": counts[slot.time],
            }
        )
        for slot in slots
    ]


class AvailabilityEngine:
    """Computes bookable slots for a date from the schedule and the booking store."""

    def __init__(
        self,
        store: BookingStore,
        schedule: ScheduleConfig = settings.schedule,
        cache: Optional[ReadThroughCache] = None,
    ) -> None:
        self._store = store
        self._schedule = schedule
        self._cache = cache

    @property
    def schedule(self) -> ScheduleConfig:
        return self._schedule

    async def _load_booked_times(self, target: date) -> tuple[str, ...]:
        times = await self._store.fetch_booked_times(target)
        return tuple(times)

    async def _fetch_booked_times(self, target: date) -> BookingFetchResult:
        try:
            if self._cache is None:
                times = await self._load_booked_times(target)
            else:
                times = await self._cache.get_or_load(
                    target, lambda: self._load_booked_times(target)
                )
        except BookingStoreUnavailable as exc:
            return BookingFetchFailed(reason=str(exc) or type(exc).__name__)
        return BookedTimes(times=times)

    async def check_availability(self, target: date) -> SlotAvailability:
        """Full availability answer for a date, including the degraded flag."""
        if not is_working_day(target, self._schedule.working_days):
            logger.debug("%s is not a working day", target.isoformat())
            return SlotAvailability(date=target, is_working_day=False)

        slots = generate_daily_slots(self._schedule.slot_times)
        fetched = await self._fetch_booked_times(target)

        if isinstance(fetched, BookingFetchFailed):
            logger.warning(
                "Booking store unavailable for %s: %s; returning all slots as available",
                target.isoformat(), fetched.reason,
            )
            return SlotAvailability(
                date=target,
                is_working_day=True,
                slots=slots,
                degraded=True,
                reason=fetched.reason,
            )

        slots = overlay_bookings(slots, fetched.times)
        logger.debug(
            "%s: %d of %d slots free",
            target.isoformat(), sum(s.is_available for s in slots), len(slots),
        )
        return SlotAvailability(date=target, is_working_day=True, slots=slots)

    async def get_available_slots(self, target: date) -> list[TimeSlot]:
        """Ordered slots for a date; empty on non-working days."""
        result = await self.check_availability(target)
        return result.slots

    def invalidate(self, target: date) -> None:
        """Drop cached booked times for a date after a booking changes."""
        if self._cache is not None:
            self._cache.invalidate(target)

    async def find_available_dates(
        self, start: date, limit: int = 5, today: Optional[date] = None
    ) -> list[SlotAvailability]:
        """Next dates from ``start`` inside the booking window with a free slot."""
        today = today or date.today()
        results: list[SlotAvailability] = []
        current = start
        for _ in range(MAX_DATE_SCAN_DAYS):
            if len(results) >= limit:
                break
            if current > today + timedelta(days=self._schedule.advance_booking_days):
                break
            if is_within_booking_window(current, today, self._schedule):
                availability = await self.check_availability(current)
                if availability.available_times:
                    results.append(availability)
            current += timedelta(days=1)
        return results

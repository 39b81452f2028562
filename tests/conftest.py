"""Shared test fixtures and helpers."""

from datetime import date
from typing import Optional

import pytest

from detailing.booking.draft import BookingDraft
from detailing.config import ScheduleConfig
from detailing.engines.availability import AvailabilityEngine
from detailing.store.booking_store import InMemoryBookingStore

# 2026-10-19 is a Monday.
MONDAY = date(2026, 10, 19)
TUESDAY = date(2026, 10, 20)
SATURDAY = date(2026, 10, 24)
SUNDAY = date(2026, 10, 25)

DEFAULT_SLOT_TIMES = ("10:00", "11:30", "13:00", "14:30", "16:00")


def make_schedule(
    working_days: tuple[int, ...] = (1, 2, 3, 4, 5, 6),
    slot_times: tuple[str, ...] = DEFAULT_SLOT_TIMES,
    advance_booking_days: int = 30,
    min_notice_days: int = 1,
) -> ScheduleConfig:
    """Helper to create a ScheduleConfig independent of the environment."""
    return ScheduleConfig(
        working_days=working_days,
        slot_times=slot_times,
        advance_booking_days=advance_booking_days,
        min_notice_days=min_notice_days,
    )


class FakeClock:
    """Manually advanced clock for cache expiry tests."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CountingStore(InMemoryBookingStore):
    """In-memory store that counts fetch calls."""

    def __init__(self) -> None:
        super().__init__()
        self.fetch_calls = 0

    async def fetch_booked_times(self, booking_date: date) -> list[str]:
        self.fetch_calls += 1
        return await super().fetch_booked_times(booking_date)


async def book(
    store: InMemoryBookingStore,
    booking_date: date = MONDAY,
    booking_time: str = "10:00",
    service_type: str = "basic-wash",
    vehicle_size: str = "small",
    postcode: Optional[str] = "BN1 1AA",
):
    """Helper to create a pending booking with sensible defaults."""
    return await store.create_booking(
        booking_date=booking_date,
        booking_time=booking_time,
        service_type=service_type,
        vehicle_size=vehicle_size,
        postcode=postcode or "",
    )


@pytest.fixture
def schedule():
    return make_schedule()


@pytest.fixture
def store():
    return CountingStore()


@pytest.fixture
def engine(store, schedule):
    return AvailabilityEngine(store, schedule)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def draft(schedule):
    return BookingDraft(schedule=schedule, today=MONDAY)

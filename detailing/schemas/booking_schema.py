"""Booking, time slot and pricing result models."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Statuses that hold a slot on the calendar.
BLOCKING_STATUSES: frozenset[BookingStatus] = frozenset(
    {BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingStatus.IN_PROGRESS}
)


class BookingRecord(BaseModel):
    """A persisted booking as the store returns it."""

    booking_ref: str
    booking_date: date
    booking_time: str
    status: BookingStatus = BookingStatus.PENDING
    service_type: str
    vehicle_size: str
    add_on_ids: list[str] = Field(default_factory=list)
    postcode: str = ""
    customer_name: str = ""
    customer_email: str = ""
    customer_phone: str = ""
    address: str = ""
    total_price: float = 0.0
    created_at: Optional[datetime] = None


class TimeSlot(BaseModel):
    """Single bookable time of day."""

    time: str
    label: str
    is_available: bool = True
    booking_count: int = 0


class SlotAvailability(BaseModel):
    """Slot list for one date, with the fail-open marker made explicit."""

    date: date
    is_working_day: bool
    slots: list[TimeSlot] = Field(default_factory=list)
    degraded: bool = False
    reason: Optional[str] = None

    @property
    def available_times(self) -> list[str]:
        return [slot.time for slot in self.slots if slot.is_available]


class PriceQuote(BaseModel):
    """Itemised price for a booking draft."""

    base_price: float = 0.0
    add_ons_price: float = 0.0
    travel_fee: float = 0.0
    total_price: float = 0.0
    priced: bool = False
    requires_manual_approval: bool = False
    travel_zone: Optional[str] = None

"""
Booking store boundary and an in-memory implementation.

The availability engine only needs one read: the times of blocking bookings
on a date. Production deployments back this with the hosted database; the
in-memory store below is used by tests and the command-line front end, and
enforces the one-blocking-booking-per-(date, time) rule that the database
would enforce with a unique constraint.
"""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import Optional, Protocol

from detailing.schemas.booking_schema import (
    BLOCKING_STATUSES,
    BookingRecord,
    BookingStatus,
)

logger = logging.getLogger(__name__)


class BookingStoreError(Exception):
    """Base class for booking store failures."""


class BookingStoreUnavailable(BookingStoreError):
    """Raised when the store cannot be reached."""


class SlotAlreadyBookedError(BookingStoreError):
    """Raised when a blocking booking already holds the requested slot."""


class BookingNotFoundError(BookingStoreError):
    """Raised when a booking reference is not known to the store."""


class BookingStore(Protocol):
    async def fetch_booked_times(self, booking_date: date) -> list[str]:
        """Return the time strings of blocking bookings on a date.

        Returns an empty list when nothing is booked; raises
        BookingStoreUnavailable when the store cannot be read.
        """
        ...


class BookingWriter(BookingStore, Protocol):
    async def create_booking(
        self,
        booking_date: date,
        booking_time: str,
        service_type: str,
        vehicle_size: str,
        add_on_ids: Optional[list[str]] = None,
        postcode: str = "",
        customer_name: str = "",
        customer_email: str = "",
        customer_phone: str = "",
        address: str = "",
        total_price: float = 0.0,
    ) -> BookingRecord:
        """Store a pending booking; raises SlotAlreadyBookedError on a held slot."""
        ...


class InMemoryBookingStore:
    """Dict-backed booking store with an outage switch for testing."""

    def __init__(self) -> None:
        self._bookings: dict[str, BookingRecord] = {}
        self._available = True

    def set_available(self, available: bool) -> None:
        """Simulate the store going down (False) or recovering (True)."""
        self._available = available

    def _ensure_available(self) -> None:
        if not self._available:
            raise BookingStoreUnavailable("Booking store is unreachable")

    def _slot_taken(self, booking_date: date, booking_time: str) -> bool:
        return any(
            b.booking_date == booking_date
            and b.booking_time == booking_time
            and b.status in BLOCKING_STATUSES
            for b in self._bookings.values()
        )

    async def fetch_booked_times(self, booking_date: date) -> list[str]:
        self._ensure_available()
        return [
            b.booking_time
            for b in self._bookings.values()
            if b.booking_date == booking_date and b.status in BLOCKING_STATUSES
        ]

    async def create_booking(
        self,
        booking_date: date,
        booking_time: str,
        service_type: str,
        vehicle_size: str,
        add_on_ids: Optional[list[str]] = None,
        postcode: str = "",
        customer_name: str = "",
        customer_email: str = "",
        customer_phone: str = "",
        address: str = "",
        total_price: float = 0.0,
    ) -> BookingRecord:
        """Create a pending booking and return the stored record.

        Raises:
            SlotAlreadyBookedError: If the slot is held by a blocking booking.
            BookingStoreUnavailable: If the store is down.
        """
        self._ensure_available()
        if self._slot_taken(booking_date, booking_time):
            raise SlotAlreadyBookedError(
                f"{booking_date.isoformat()} {booking_time} is already booked"
            )

        ref = f"BK-{uuid.uuid4().hex[:6].upper()}"
        record = BookingRecord(
            booking_ref=ref,
            booking_date=booking_date,
            booking_time=booking_time,
            status=BookingStatus.PENDING,
            service_type=service_type,
            vehicle_size=vehicle_size,
            add_on_ids=list(add_on_ids or []),
            postcode=postcode,
            customer_name=customer_name,
            customer_email=customer_email,
            customer_phone=customer_phone,
            address=address,
            total_price=total_price,
            created_at=datetime.now(timezone.utc),
        )
        self._bookings[ref] = record
        logger.info("Booking created: %s on %s at %s", ref, booking_date, booking_time)
        return record

    async def update_status(self, booking_ref: str, status: BookingStatus) -> BookingRecord:
        """Move a booking to a new status.

        Re-activating a cancelled or completed booking re-checks the slot.
        """
        self._ensure_available()
        record = self._bookings.get(booking_ref)
        if record is None:
            raise BookingNotFoundError(f"Booking {booking_ref} not found")
        if (
            status in BLOCKING_STATUSES
            and record.status not in BLOCKING_STATUSES
            and self._slot_taken(record.booking_date, record.booking_time)
        ):
            raise SlotAlreadyBookedError(
                f"{record.booking_date.isoformat()} {record.booking_time} is already booked"
            )
        updated = record.model_copy(update={"status": status})
        self._bookings[booking_ref] = updated
        logger.info("Booking %s: %s -> %s", booking_ref, record.status.value, status.value)
        return updated

    async def cancel_booking(self, booking_ref: str) -> BookingRecord:
        """Cancel a booking, freeing its slot."""
        return await self.update_status(booking_ref, BookingStatus.CANCELLED)

    async def get_booking(self, booking_ref: str) -> Optional[BookingRecord]:
        """Retrieve a booking by reference number."""
        self._ensure_available()
        return self._bookings.get(booking_ref)

    def reset(self) -> None:
        """Clear all bookings and restore availability. Used by test fixtures."""
        self._bookings.clear()
        self._available = True

from detailing.store.booking_store import (
    BookingNotFoundError,
    BookingStore,
    BookingStoreError,
    BookingStoreUnavailable,
    BookingWriter,
    InMemoryBookingStore,
    SlotAlreadyBookedError,
)
from detailing.store.cache import ReadThroughCache

__all__ = [
    "BookingStore", "BookingWriter", "InMemoryBookingStore", "ReadThroughCache",
    "BookingStoreError", "BookingStoreUnavailable",
    "SlotAlreadyBookedError", "BookingNotFoundError",
]

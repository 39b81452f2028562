from detailing.engines.availability import (
    AvailabilityEngine,
    generate_daily_slots,
    is_within_booking_window,
    is_working_day,
    overlay_bookings,
    weekday_index,
)
from detailing.engines.pricing import (
    calculate_add_ons_price,
    calculate_base_price,
    calculate_service_duration,
    calculate_travel_fee,
    match_travel_zone,
    quote_booking,
)

__all__ = [
    "AvailabilityEngine", "generate_daily_slots", "overlay_bookings",
    "is_working_day", "is_within_booking_window", "weekday_index",
    "calculate_base_price", "calculate_add_ons_price", "calculate_travel_fee",
    "calculate_service_duration", "match_travel_zone", "quote_booking",
]

from detailing.booking.draft import (
    BookingDraft,
    BookingStep,
    IncompleteStepError,
    InvalidStepError,
)

__all__ = ["BookingDraft", "BookingStep", "IncompleteStepError", "InvalidStepError"]

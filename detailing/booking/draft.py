"""
Multi-step booking draft.

Holds the customer's selections while they move through the booking form
and keeps an itemised quote in sync with them. Steps run in a fixed order:

    vehicle -> service -> schedule -> details -> review -> submitted

Usage:
    draft = BookingDraft()
    draft.set_vehicle_size("medium")
    draft.advance()
    draft.set_service("full-valet")
    assert draft.quote.base_price == 119.99
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Callable, Optional

from detailing.catalog.services import DEFAULT_CATALOG, Catalog, coerce_vehicle_size
from detailing.config import ScheduleConfig, settings
from detailing.engines.availability import (
    AvailabilityEngine,
    is_within_booking_window,
    is_working_day,
)
from detailing.engines.pricing import quote_booking
from detailing.schemas.booking_schema import BookingRecord, PriceQuote
from detailing.store.booking_store import BookingWriter
from detailing.utils import is_valid_postcode, normalize_postcode

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 2
MIN_PHONE_DIGITS = 10
MIN_ADDRESS_LENGTH = 5
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class BookingStep(str, Enum):
    """Form steps in the order the customer completes them."""
    VEHICLE = "vehicle"
    SERVICE = "service"
    SCHEDULE = "schedule"
    DETAILS = "details"
    REVIEW = "review"
    SUBMITTED = "submitted"


STEP_ORDER: list[BookingStep] = list(BookingStep)


class IncompleteStepError(Exception):
    """Raised when advancing past a step with missing or invalid fields."""

    def __init__(self, step: BookingStep, problems: list[str]) -> None:
        self.step = step
        self.problems = problems
        super().__init__(f"Cannot leave '{step.value}': {', '.join(problems)}")


class InvalidStepError(Exception):
    """Raised when jumping to a step that has not been reached yet."""


@dataclass
class StepEntry:
    """Recorded history entry for a step visit."""
    step: BookingStep
    entered_at: datetime


@dataclass
class BookingDraft:
    """Selections and running quote for one booking in progress."""

    catalog: Catalog = DEFAULT_CATALOG
    schedule: ScheduleConfig = settings.schedule
    today: Optional[date] = None
    vehicle_size: Optional[str] = None
    service_type: Optional[str] = None
    add_on_ids: list[str] = field(default_factory=list)
    booking_date: Optional[date] = None
    booking_time: Optional[str] = None
    full_name: str = ""
    email: str = ""
    phone: str = ""
    postcode: str = ""
    address: str = ""
    quote: PriceQuote = field(default_factory=PriceQuote)
    booking_ref: Optional[str] = None
    _step: BookingStep = field(default=BookingStep.VEHICLE, init=False)
    _furthest: BookingStep = field(default=BookingStep.VEHICLE, init=False)
    _history: list[StepEntry] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self._history.append(StepEntry(step=self._step, entered_at=datetime.now(timezone.utc)))

    @property
    def current_step(self) -> BookingStep:
        return self._step

    def get_step_trace(self) -> list[str]:
        """Return ordered list of step names visited."""
        return [entry.step.value for entry in self._history]

    # ------------------------------------------------------------------ #
    # Setters
    # ------------------------------------------------------------------ #

    def set_vehicle_size(self, vehicle_size: str) -> None:
        size = coerce_vehicle_size(vehicle_size)
        self.vehicle_size = size.value if size else vehicle_size
        self.recalculate()

    def set_service(self, service_type: str) -> None:
        self.service_type = service_type
        self.recalculate()

    def set_add_ons(self, add_on_ids: list[str]) -> None:
        self.add_on_ids = list(add_on_ids)
        self.recalculate()

    def set_date_time(self, booking_date: Optional[date], booking_time: Optional[str]) -> None:
        self.booking_date = booking_date
        self.booking_time = booking_time

    def set_contact_details(self, **details: str) -> None:
        """Update any of full_name, email, phone, postcode, address."""
        allowed = {"full_name", "email", "phone", "postcode", "address"}
        unknown = set(details) - allowed
        if unknown:
            raise ValueError(f"Unknown contact fields: {sorted(unknown)}")
        for name, value in details.items():
            setattr(self, name, value.strip())
        if "postcode" in details:
            self.recalculate()

    def recalculate(self) -> PriceQuote:
        """Reprice from the current selections."""
        if not self.service_type or not self.vehicle_size:
            self.quote = PriceQuote()
        else:
            self.quote = quote_booking(
                self.service_type,
                self.vehicle_size,
                self.add_on_ids,
                self.postcode or None,
                self.catalog,
            )
        return self.quote

    # ------------------------------------------------------------------ #
    # Step validation
    # ------------------------------------------------------------------ #

    def _problems_vehicle(self) -> list[str]:
        if coerce_vehicle_size(self.vehicle_size) is None:
            return ["vehicle_size"]
        return []

    def _problems_service(self) -> list[str]:
        if not self.service_type or self.catalog.get_service(self.service_type) is None:
            return ["service_type"]
        if not self.quote.priced:
            return ["price"]
        return []

    def _problems_schedule(self) -> list[str]:
        """The date must be a bookable working day and the time one of its slots."""
        problems = []
        today = self.today or date.today()
        if (
            self.booking_date is None
            or not is_working_day(self.booking_date, self.schedule.working_days)
            or not is_within_booking_window(self.booking_date, today, self.schedule)
        ):
            problems.append("booking_date")
        if self.booking_time not in self.schedule.slot_times:
            problems.append("booking_time")
        return problems

    def _problems_details(self) -> list[str]:
        problems = []
        if len(self.full_name) < MIN_NAME_LENGTH:
            problems.append("full_name")
        if not _EMAIL_RE.match(self.email):
            problems.append("email")
        if len(re.sub(r"[^\d]", "", self.phone)) < MIN_PHONE_DIGITS:
            problems.append("phone")
        if not is_valid_postcode(self.postcode):
            problems.append("postcode")
        if len(self.address) < MIN_ADDRESS_LENGTH:
            problems.append("address")
        return problems

    def _step_validators(self) -> dict[BookingStep, Callable[[], list[str]]]:
        return {
            BookingStep.VEHICLE: self._problems_vehicle,
            BookingStep.SERVICE: self._problems_service,
            BookingStep.SCHEDULE: self._problems_schedule,
            BookingStep.DETAILS: self._problems_details,
        }

    def missing_for(self, step: BookingStep) -> list[str]:
        """Fields that block leaving ``step``."""
        validator = self._step_validators().get(step)
        return validator() if validator else []

    # ------------------------------------------------------------------ #
    # Navigation
    # ------------------------------------------------------------------ #

    def _enter(self, step: BookingStep) -> BookingStep:
        old = self._step
        self._step = step
        if STEP_ORDER.index(step) > STEP_ORDER.index(self._furthest):
            self._furthest = step
        self._history.append(StepEntry(step=step, entered_at=datetime.now(timezone.utc)))
        logger.debug("Booking step: %s -> %s", old.value, step.value)
        return step

    def advance(self) -> BookingStep:
        """Move to the next step once the current one is complete.

        Raises:
            IncompleteStepError: If the current step has missing fields.
            InvalidStepError: From review (use submit) or after submission.
        """
        if self._step in (BookingStep.REVIEW, BookingStep.SUBMITTED):
            raise InvalidStepError(f"Cannot advance from '{self._step.value}'")
        problems = self.missing_for(self._step)
        if problems:
            raise IncompleteStepError(self._step, problems)
        return self._enter(STEP_ORDER[STEP_ORDER.index(self._step) + 1])

    def back(self) -> BookingStep:
        """Return to the previous step. A no-op on the first step."""
        if self._step == BookingStep.SUBMITTED:
            raise InvalidStepError("Booking already submitted")
        index = STEP_ORDER.index(self._step)
        if index == 0:
            return self._step
        return self._enter(STEP_ORDER[index - 1])

    def go_to(self, step: BookingStep) -> BookingStep:
        """Jump to any step already reached, e.g. from the review summary."""
        if self._step == BookingStep.SUBMITTED or step == BookingStep.SUBMITTED:
            raise InvalidStepError("Submitted bookings cannot be navigated")
        if STEP_ORDER.index(step) > STEP_ORDER.index(self._furthest):
            raise InvalidStepError(
                f"Step '{step.value}' not reached yet (furthest: '{self._furthest.value}')"
            )
        return self._enter(step)

    # ------------------------------------------------------------------ #
    # Submission
    # ------------------------------------------------------------------ #

    async def submit(
        self, store: BookingWriter, engine: Optional[AvailabilityEngine] = None
    ) -> BookingRecord:
        """Persist the booking from the review step.

        Store errors (slot taken, store down) propagate to the caller, and
        the draft stays on review so the customer can pick another slot.
        When ``engine`` is given its cached booked times for the date are
        dropped after the write; otherwise the caller must invalidate.
        """
        if self._step != BookingStep.REVIEW:
            raise InvalidStepError(f"Submit is only allowed from review, not '{self._step.value}'")
        for step in (BookingStep.VEHICLE, BookingStep.SERVICE, BookingStep.SCHEDULE,
                     BookingStep.DETAILS):
            problems = self.missing_for(step)
            if problems:
                raise IncompleteStepError(step, problems)

        record = await store.create_booking(
            booking_date=self.booking_date,
            booking_time=self.booking_time,
            service_type=self.service_type,
            vehicle_size=self.vehicle_size,
            add_on_ids=self.add_on_ids,
            postcode=normalize_postcode(self.postcode),
            customer_name=self.full_name,
            customer_email=self.email,
            customer_phone=self.phone,
            address=self.address,
            total_price=self.quote.total_price,
        )
        if engine is not None:
            engine.invalidate(record.booking_date)
        self.booking_ref = record.booking_ref
        self._enter(BookingStep.SUBMITTED)
        return record

    def to_summary(self) -> dict[str, Any]:
        """Plain-dict view for the review screen."""
        service = self.catalog.get_service(self.service_type) if self.service_type else None
        return {
            "step": self._step.value,
            "vehicle_size": self.vehicle_size,
            "service": service.name if service else None,
            "add_ons": list(self.add_on_ids),
            "date": self.booking_date.isoformat() if self.booking_date else None,
            "time": self.booking_time,
            "name": self.full_name,
            "postcode": normalize_postcode(self.postcode) if self.postcode else "",
            "base_price": self.quote.base_price,
            "add_ons_price": self.quote.add_ons_price,
            "travel_fee": self.quote.travel_fee,
            "total_price": self.quote.total_price,
            "requires_manual_approval": self.quote.requires_manual_approval,
            "booking_ref": self.booking_ref,
        }

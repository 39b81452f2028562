"""
Command-line front end for the booking core.

Prices a booking or lists slot availability for a date against an empty
in-memory booking store. Useful for checking catalog and schedule changes.

Usage:
    Quote:  python main.py quote --service full-valet --size medium \
                --add-on ceramic-boost --postcode "BN41 1AA"
    Slots:  python main.py slots --date 2026-10-20
    Dates:  python main.py dates --limit 5
"""

import argparse
import asyncio
import sys
from datetime import date
from typing import Optional

from detailing.catalog.services import get_all_add_ons, get_all_services
from detailing.config import settings
from detailing.engines.availability import AvailabilityEngine
from detailing.engines.pricing import quote_booking
from detailing.logging_context import new_request_id, request_context
from detailing.store.booking_store import InMemoryBookingStore
from detailing.store.cache import ReadThroughCache


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date (expected YYYY-MM-DD): {value!r}") from None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"{settings.business.name} booking pricing and availability."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    quote = sub.add_parser("quote", help="Price a booking.")
    quote.add_argument("--service", required=True, help="Service id, e.g. full-valet.")
    quote.add_argument("--size", required=True, help="Vehicle size: small, medium, large, van.")
    quote.add_argument(
        "--add-on", dest="add_ons", action="append", default=[],
        help="Add-on id (repeatable).",
    )
    quote.add_argument("--postcode", default=None, help="Customer postcode for the travel fee.")

    slots = sub.add_parser("slots", help="Show slot availability for a date.")
    slots.add_argument("--date", type=_parse_date, required=True, help="Date as YYYY-MM-DD.")

    dates = sub.add_parser("dates", help="List the next dates with free slots.")
    dates.add_argument("--limit", type=int, default=5, help="How many dates to list.")

    sub.add_parser("catalog", help="List services and add-ons.")
    return parser


def _format_money(amount: float) -> str:
    return f"{settings.business.currency} {amount:.2f}"


def _run_quote(args: argparse.Namespace) -> int:
    quote = quote_booking(args.service, args.size, args.add_ons, args.postcode)
    lines = [
        f"Base price:   {_format_money(quote.base_price)}",
        f"Add-ons:      {_format_money(quote.add_ons_price)}",
        f"Travel fee:   {_format_money(quote.travel_fee)}"
        + (f" ({quote.travel_zone})" if quote.travel_zone else ""),
        f"Total:        {_format_money(quote.total_price)}",
    ]
    if not quote.priced:
        lines.append("Could not price this service and vehicle size.")
    if quote.requires_manual_approval:
        lines.append("Postcode is outside the normal service area: manual approval needed.")
    sys.stdout.write("\n".join(lines) + "\n")
    return 0 if quote.priced else 1


def _build_engine() -> AvailabilityEngine:
    return AvailabilityEngine(
        InMemoryBookingStore(),
        settings.schedule,
        ReadThroughCache(settings.cache.availability_ttl_sec),
    )


async def _run_slots(args: argparse.Namespace) -> int:
    result = await _build_engine().check_availability(args.date)
    if not result.is_working_day:
        sys.stdout.write(f"{args.date.isoformat()} is not a working day.\n")
        return 0
    for slot in result.slots:
        state = "available" if slot.is_available else "booked"
        sys.stdout.write(f"{slot.time}  {slot.label:>9}  {state}\n")
    if result.degraded:
        sys.stdout.write("Warning: booking store unavailable, availability not verified.\n")
    return 0


async def _run_dates(args: argparse.Namespace) -> int:
    today = date.today()
    found = await _build_engine().find_available_dates(today, limit=args.limit, today=today)
    for availability in found:
        sys.stdout.write(
            f"{availability.date.isoformat()}  {len(availability.available_times)} slot(s)\n"
        )
    return 0


def _run_catalog() -> int:
    for service in get_all_services():
        sys.stdout.write(
            f"{service['id']:<16} {service['name']:<16} from {_format_money(service['from_price'])}\n"
        )
    for add_on in get_all_add_ons():
        sys.stdout.write(
            f"{add_on['id']:<16} {add_on['name']:<16} from {_format_money(add_on['from_price'])}\n"
        )
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    with request_context(new_request_id("CLI")):
        if args.command == "quote":
            return _run_quote(args)
        if args.command == "slots":
            return asyncio.run(_run_slots(args))
        if args.command == "dates":
            return asyncio.run(_run_dates(args))
        return _run_catalog()


if __name__ == "__main__":
    sys.exit(main())

"""
Booking price calculation.

price = base(service, vehicle size) + add-ons(vehicle size) + travel fee(postcode zone)

Every function here is pure and never raises for an unknown key: a missing
service, size or add-on contributes 0, and a postcode outside every travel
zone is charged the highest zone fee. Callers decide whether a 0 base price
or an unmatched postcode is a user-facing problem; ``quote_booking`` surfaces
both as flags.
"""

import logging
import re
from typing import Iterable, Optional

from detailing.catalog.services import DEFAULT_CATALOG, Catalog, coerce_vehicle_size
from detailing.schemas.booking_schema import PriceQuote
from detailing.schemas.catalog_schema import TravelZone
from detailing.utils import outward_code

logger = logging.getLogger(__name__)

_AREA_RE = re.compile(r"^[A-Z]+")


def calculate_base_price(
    service_type: str, vehicle_size: str, catalog: Catalog = DEFAULT_CATALOG
) -> float:
    """Base price of a service for a vehicle size, or 0 if either is unknown."""
    service = catalog.get_service(service_type)
    if service is None:
        logger.debug("No service %r in catalog", service_type)
        return 0
    size = coerce_vehicle_size(vehicle_size)
    if size is None:
        logger.debug("No vehicle size %r in catalog", vehicle_size)
        return 0
    return service.base_price.get(size, 0)


def calculate_add_ons_price(
    add_on_ids: Iterable[str], vehicle_size: str, catalog: Catalog = DEFAULT_CATALOG
) -> float:
    """Sum of add-on prices for a vehicle size.

    Unknown ids are skipped. Ids are not de-duplicated, so an id listed
    twice is charged twice.
    """
    size = coerce_vehicle_size(vehicle_size)
    total = 0
    for add_on_id in add_on_ids:
        add_on = catalog.get_add_on(add_on_id)
        if add_on is None:
            logger.debug("Ignoring unknown add-on %r", add_on_id)
            continue
        if size is not None:
            total += add_on.price.get(size, 0)
    return total


def _prefix_matches(prefix: str, outward: str) -> bool:
    # "BN1" must not claim "BN10"; a letters-only prefix covers the whole area.
    if outward == prefix:
        return True
    if prefix.isalpha():
        area = _AREA_RE.match(outward)
        return area is not None and area.group(0) == prefix
    return False


def match_travel_zone(
    postcode: str, catalog: Catalog = DEFAULT_CATALOG
) -> Optional[TravelZone]:
    """Return the first zone whose prefixes cover the postcode's outward code."""
    outward = outward_code(postcode)
    if not outward:
        return None
    for zone in catalog.travel_zones:
        if any(_prefix_matches(prefix.upper(), outward) for prefix in zone.prefixes):
            return zone
    return None


def calculate_travel_fee(postcode: str, catalog: Catalog = DEFAULT_CATALOG) -> float:
    """Travel fee for a postcode; the maximum zone fee when no zone matches."""
    zone = match_travel_zone(postcode, catalog)
    if zone is None:
        fee = catalog.max_travel_fee
        logger.info("Postcode %r outside travel zones, charging fallback fee %s", postcode, fee)
        return fee
    return zone.fee


def calculate_service_duration(
    service_type: str, catalog: Catalog = DEFAULT_CATALOG
) -> int:
    """Expected job length in minutes, 0 for an unknown service."""
    service = catalog.get_service(service_type)
    return service.duration_minutes if service else 0


def quote_booking(
    service_type: str,
    vehicle_size: str,
    add_on_ids: Iterable[str] = (),
    postcode: Optional[str] = None,
    catalog: Catalog = DEFAULT_CATALOG,
) -> PriceQuote:
    """Itemise the full price of a booking.

    ``priced`` is False when the base price resolved to 0 (service or size
    not in the catalog). ``requires_manual_approval`` is True when a postcode
    was given but fell outside every travel zone. Without a postcode the
    travel fee is left at 0.
    """
    base_price = calculate_base_price(service_type, vehicle_size, catalog)
    add_ons_price = calculate_add_ons_price(add_on_ids, vehicle_size, catalog)

    travel_fee: float = 0
    zone: Optional[TravelZone] = None
    requires_manual_approval = False
    if postcode:
        zone = match_travel_zone(postcode, catalog)
        travel_fee = zone.fee if zone else catalog.max_travel_fee
        requires_manual_approval = zone is None

    return PriceQuote(
        base_price=base_price,
        add_ons_price=add_ons_price,
        travel_fee=travel_fee,
        total_price=round(base_price + add_ons_price + travel_fee, 2),
        priced=base_price > 0,
        requires_manual_approval=requires_manual_approval,
        travel_zone=zone.name if zone else None,
    )

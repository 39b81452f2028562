"""Service catalog with per-size pricing, add-ons and postcode travel zones."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from detailing.schemas.catalog_schema import (
    AddOn,
    Service,
    ServiceType,
    TravelZone,
    VehicleSize,
)

logger = logging.getLogger(__name__)

S, M, L, V = VehicleSize.SMALL, VehicleSize.MEDIUM, VehicleSize.LARGE, VehicleSize.VAN

SERVICES: tuple[Service, ...] = (
    Service(
        id=ServiceType.BASIC_WASH,
        name="Basic Wash",
        description="Essential car cleaning service",
        features=(
            "Exterior wash & dry",
            "Interior vacuum",
            "Dashboard clean",
            "Window clean",
            "Tyre shine",
        ),
        base_price={S: 49.99, M: 59.99, L: 69.99, V: 79.99},
        duration_minutes=90,
    ),
    Service(
        id=ServiceType.FULL_VALET,
        name="Full Valet",
        description="Comprehensive cleaning inside and out",
        features=(
            "All Basic Wash features",
            "Interior deep clean",
            "Leather/upholstery clean",
            "Paint decontamination",
            "Wheel deep clean",
            "Wax protection",
        ),
        base_price={S: 99.99, M: 119.99, L: 139.99, V: 159.99},
        duration_minutes=180,
    ),
    Service(
        id=ServiceType.PREMIUM_DETAIL,
        name="Premium Detail",
        description="Professional detailing service",
        features=(
            "All Full Valet features",
            "Paint correction",
            "Ceramic coating",
            "Engine bay clean",
            "Glass polish",
            "Paint sealant",
        ),
        base_price={S: 199.99, M: 249.99, L: 299.99, V: 349.99},
        duration_minutes=300,
    ),
)

ADD_ONS: tuple[AddOn, ...] = (
    AddOn(
        id="ceramic-boost",
        name="Ceramic Boost",
        description="Spray ceramic top-up for extra gloss and water beading",
        price={S: 24.99, M: 29.99, L: 34.99, V: 39.99},
    ),
    AddOn(
        id="interior-sanitize",
        name="Interior Sanitize",
        description="Steam sanitising of seats, vents and touch points",
        price={S: 19.99, M: 24.99, L: 29.99, V: 34.99},
    ),
    AddOn(
        id="paint-protection",
        name="Paint Protection",
        description="Long-lasting paint protection coating",
        price={S: 49.99, M: 59.99, L: 69.99, V: 79.99},
    ),
    AddOn(
        id="interior-protection",
        name="Interior Protection",
        description="Fabric and leather protection treatment",
        price={S: 39.99, M: 49.99, L: 59.99, V: 69.99},
    ),
    AddOn(
        id="wheel-protection",
        name="Wheel Protection",
        description="Ceramic wheel coating for lasting shine",
        price={S: 29.99, M: 34.99, L: 39.99, V: 44.99},
    ),
)

# Checked in order; the first zone holding a matching prefix wins.
TRAVEL_ZONES: tuple[TravelZone, ...] = (
    TravelZone(name="Local", prefixes=("BN1", "BN2", "BN3"), fee=0),
    TravelZone(name="Near", prefixes=("BN41", "BN42", "BN43", "BN44", "BN45"), fee=10),
    TravelZone(
        name="Outer",
        prefixes=(
            "BN5", "BN6", "BN7", "BN8", "BN9",
            "BN10", "BN11", "BN12", "BN13", "BN14", "BN15", "BN16", "BN17", "BN18",
        ),
        fee=20,
    ),
)


def _enum_value(value: object) -> object:
    return value.value if isinstance(value, Enum) else value


def coerce_vehicle_size(value: object) -> Optional[VehicleSize]:
    """Map a size or its string value to VehicleSize; None when unrecognised."""
    try:
        return VehicleSize(_enum_value(value))
    except ValueError:
        return None


@dataclass(frozen=True)
class Catalog:
    """Immutable view over the static catalog tables.

    Built once at import time and shared by reference; lookups are exact
    matches on identifier and return None on a miss.
    """

    services: tuple[Service, ...]
    add_ons: tuple[AddOn, ...]
    travel_zones: tuple[TravelZone, ...]

    def get_service(self, service_type: str) -> Optional[Service]:
        key = _enum_value(service_type)
        for service in self.services:
            if service.id.value == key:
                return service
        return None

    def get_add_on(self, add_on_id: str) -> Optional[AddOn]:
        for add_on in self.add_ons:
            if add_on.id == add_on_id:
                return add_on
        return None

    @property
    def max_travel_fee(self) -> float:
        """Fallback fee for postcodes outside every zone (0 with no zones)."""
        return max((zone.fee for zone in self.travel_zones), default=0)


def _check_complete(catalog: Catalog) -> None:
    """Every entry must price every vehicle size."""
    sizes = set(VehicleSize)
    for service in catalog.services:
        missing = sizes - set(service.base_price)
        if missing:
            raise ValueError(f"Service {service.id.value} has no price for {sorted(missing)}")
    for add_on in catalog.add_ons:
        missing = sizes - set(add_on.price)
        if missing:
            raise ValueError(f"Add-on {add_on.id} has no price for {sorted(missing)}")


def build_catalog(
    services: tuple[Service, ...] = SERVICES,
    add_ons: tuple[AddOn, ...] = ADD_ONS,
    travel_zones: tuple[TravelZone, ...] = TRAVEL_ZONES,
) -> Catalog:
    """Assemble and check a catalog. Raises ValueError on a missing size price."""
    catalog = Catalog(services=services, add_ons=add_ons, travel_zones=travel_zones)
    _check_complete(catalog)
    logger.debug(
        "Catalog built: %d services, %d add-ons, %d travel zones",
        len(services), len(add_ons), len(travel_zones),
    )
    return catalog


DEFAULT_CATALOG = build_catalog()


def get_all_services(catalog: Catalog = DEFAULT_CATALOG) -> list[dict]:
    """Return all services with basic info for display."""
    return [
        {
            "id": service.id.value,
            "name": service.name,
            "from_price": min(service.base_price.values()),
            "duration_minutes": service.duration_minutes,
        }
        for service in catalog.services
    ]


def get_all_add_ons(catalog: Catalog = DEFAULT_CATALOG) -> list[dict]:
    """Return all add-ons with basic info for display."""
    return [
        {"id": add_on.id, "name": add_on.name, "from_price": min(add_on.price.values())}
        for add_on in catalog.add_ons
    ]

"""Tests for the static catalog."""

import pytest
from pydantic import ValidationError

from detailing.catalog.services import (
    ADD_ONS,
    DEFAULT_CATALOG,
    SERVICES,
    TRAVEL_ZONES,
    build_catalog,
    coerce_vehicle_size,
    get_all_add_ons,
    get_all_services,
)
from detailing.schemas.catalog_schema import AddOn, ServiceType, TravelZone, VehicleSize


class TestCatalogContents:
    def test_every_service_type_present(self):
        assert {s.id for s in SERVICES} == set(ServiceType)

    def test_every_entry_prices_every_size(self):
        for service in SERVICES:
            assert set(service.base_price) == set(VehicleSize)
        for add_on in ADD_ONS:
            assert set(add_on.price) == set(VehicleSize)

    def test_prices_non_negative(self):
        for service in SERVICES:
            assert all(p >= 0 for p in service.base_price.values())
        assert all(zone.fee >= 0 for zone in TRAVEL_ZONES)

    def test_first_add_ons_are_ceramic_then_sanitize(self):
        assert [a.id for a in ADD_ONS[:2]] == ["ceramic-boost", "interior-sanitize"]

    def test_all_add_ons_present(self):
        assert [a.id for a in ADD_ONS] == [
            "ceramic-boost",
            "interior-sanitize",
            "paint-protection",
            "interior-protection",
            "wheel-protection",
        ]

    def test_interior_protection_prices(self):
        add_on = DEFAULT_CATALOG.get_add_on("interior-protection")
        assert dict(add_on.price) == {
            VehicleSize.SMALL: 39.99,
            VehicleSize.MEDIUM: 49.99,
            VehicleSize.LARGE: 59.99,
            VehicleSize.VAN: 69.99,
        }

    def test_max_travel_fee(self):
        assert DEFAULT_CATALOG.max_travel_fee == 20


class TestLookups:
    def test_get_service_by_string(self):
        assert DEFAULT_CATALOG.get_service("full-valet").name == "Full Valet"

    def test_get_service_by_enum(self):
        assert DEFAULT_CATALOG.get_service(ServiceType.BASIC_WASH).name == "Basic Wash"

    def test_get_service_miss(self):
        assert DEFAULT_CATALOG.get_service("Full-Valet") is None

    def test_get_add_on_miss(self):
        assert DEFAULT_CATALOG.get_add_on("gold-plating") is None

    @pytest.mark.parametrize("value", ["small", VehicleSize.SMALL])
    def test_coerce_vehicle_size(self, value):
        assert coerce_vehicle_size(value) is VehicleSize.SMALL

    def test_coerce_unknown_size(self):
        assert coerce_vehicle_size("SMALL") is None
        assert coerce_vehicle_size(None) is None


class TestImmutability:
    def test_models_are_frozen(self):
        with pytest.raises(ValidationError):
            SERVICES[0].name = "Changed"

    def test_service_price_map_is_read_only(self):
        with pytest.raises(TypeError):
            SERVICES[0].base_price[VehicleSize.SMALL] = 0
        assert DEFAULT_CATALOG.get_service("basic-wash").base_price[VehicleSize.SMALL] == 49.99

    def test_add_on_price_map_is_read_only(self):
        with pytest.raises(TypeError):
            ADD_ONS[0].price[VehicleSize.VAN] = 0

    def test_price_map_copied_from_input(self):
        prices = {size: 1.0 for size in VehicleSize}
        add_on = AddOn(id="x", name="X", description="", price=prices)
        prices[VehicleSize.SMALL] = 99.0
        assert add_on.price[VehicleSize.SMALL] == 1.0

    def test_prices_serialize_as_dict(self):
        dumped = ADD_ONS[0].model_dump()
        assert isinstance(dumped["price"], dict)
        assert dumped["price"][VehicleSize.SMALL] == 24.99

    def test_catalog_is_frozen(self):
        with pytest.raises(AttributeError):
            DEFAULT_CATALOG.services = ()

    def test_negative_zone_fee_rejected(self):
        with pytest.raises(ValidationError):
            TravelZone(name="Bad", prefixes=("BN1",), fee=-5)

    def test_incomplete_add_on_rejected_at_build(self):
        partial = AddOn(
            id="half", name="Half", description="", price={VehicleSize.SMALL: 1.0}
        )
        with pytest.raises(ValueError, match="half"):
            build_catalog(add_ons=(partial,))


class TestListings:
    def test_get_all_services(self):
        services = get_all_services()
        assert [s["id"] for s in services] == ["basic-wash", "full-valet", "premium-detail"]
        assert services[0]["from_price"] == 49.99

    def test_get_all_add_ons(self):
        assert len(get_all_add_ons()) == len(ADD_ONS)

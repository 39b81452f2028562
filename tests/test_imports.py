"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestSchemaImports:
    def test_import_catalog_schema(self):
        from detailing.schemas.catalog_schema import ServiceType, VehicleSize

        assert VehicleSize.VAN == "van"
        assert ServiceType.FULL_VALET == "full-valet"

    def test_import_booking_schema(self):
        from detailing.schemas.booking_schema import BLOCKING_STATUSES, BookingStatus

        assert BookingStatus.IN_PROGRESS in BLOCKING_STATUSES
        assert BookingStatus.CANCELLED not in BLOCKING_STATUSES


class TestPackageReExports:
    def test_catalog_package(self):
        from detailing.catalog import DEFAULT_CATALOG, SERVICES

        assert len(SERVICES) == 3
        assert DEFAULT_CATALOG.services == SERVICES

    def test_engines_package(self):
        from detailing.engines import AvailabilityEngine, calculate_base_price

        assert callable(calculate_base_price)
        assert AvailabilityEngine is not None

    def test_store_package(self):
        from detailing.store import BookingStoreUnavailable, BookingStoreError

        assert issubclass(BookingStoreUnavailable, BookingStoreError)

    def test_booking_package(self):
        from detailing.booking import BookingDraft, BookingStep

        assert BookingDraft().current_step == BookingStep.VEHICLE


class TestCli:
    def test_quote_command(self, capsys):
        from main import main

        assert main(["quote", "--service", "full-valet", "--size", "medium",
                     "--postcode", "BN41 1AA"]) == 0
        out = capsys.readouterr().out
        assert "119.99" in out
        assert "Near" in out

    def test_quote_unpriced_exit_code(self, capsys):
        from main import main

        assert main(["quote", "--service", "bogus", "--size", "medium"]) == 1
        assert "Could not price" in capsys.readouterr().out

    def test_slots_on_sunday(self, capsys):
        from main import main

        assert main(["slots", "--date", "2026-10-25"]) == 0
        assert "not a working day" in capsys.readouterr().out

    def test_catalog_command(self, capsys):
        from main import main

        assert main(["catalog"]) == 0
        assert "ceramic-boost" in capsys.readouterr().out

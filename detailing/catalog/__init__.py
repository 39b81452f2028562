from detailing.catalog.services import (
    ADD_ONS,
    DEFAULT_CATALOG,
    SERVICES,
    TRAVEL_ZONES,
    Catalog,
    build_catalog,
    get_all_add_ons,
    get_all_services,
)

__all__ = [
    "ADD_ONS", "SERVICES", "TRAVEL_ZONES", "DEFAULT_CATALOG",
    "Catalog", "build_catalog", "get_all_services", "get_all_add_ons",
]

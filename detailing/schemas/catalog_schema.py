"""Catalog data models: services, add-ons and travel zones.

Models are frozen and their per-size price maps are read-only views, so a
catalog built at import time cannot be changed by the code that reads it.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class VehicleSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    VAN = "van"


class ServiceType(str, Enum):
    BASIC_WASH = "basic-wash"
    FULL_VALET = "full-valet"
    PREMIUM_DETAIL = "premium-detail"


def _read_only(prices: Mapping[VehicleSize, float]) -> Mapping[VehicleSize, float]:
    return MappingProxyType(dict(prices))


class Service(BaseModel):
    """A detailing package priced per vehicle size."""

    model_config = ConfigDict(frozen=True)

    id: ServiceType
    name: str
    description: str
    features: tuple[str, ...] = ()
    base_price: dict[VehicleSize, float]
    duration_minutes: int = Field(default=0, ge=0)

    @field_validator("base_price")
    @classmethod
    def freeze_prices(cls, prices: Mapping[VehicleSize, float]) -> Mapping[VehicleSize, float]:
        return _read_only(prices)

    @field_serializer("base_price")
    def dump_prices(self, prices: Mapping[VehicleSize, float]) -> dict[VehicleSize, float]:
        return dict(prices)


class AddOn(BaseModel):
    """An optional extra priced per vehicle size."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    price: dict[VehicleSize, float]

    @field_validator("price")
    @classmethod
    def freeze_prices(cls, prices: Mapping[VehicleSize, float]) -> Mapping[VehicleSize, float]:
        return _read_only(prices)

    @field_serializer("price")
    def dump_prices(self, prices: Mapping[VehicleSize, float]) -> dict[VehicleSize, float]:
        return dict(prices)


class TravelZone(BaseModel):
    """A set of outward-code prefixes sharing one flat travel fee."""

    model_config = ConfigDict(frozen=True)

    name: str
    prefixes: tuple[str, ...]
    fee: float = Field(ge=0)

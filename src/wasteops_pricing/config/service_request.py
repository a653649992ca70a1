"""Community service request: the input to the pricing engine."""

from __future__ import annotations

from datetime import date
from typing import Any, Literal

from pydantic import Field

from wasteops_pricing.config.wire import WireModel

UnitType = Literal["Single Family Homes", "Townhomes", "Condos", "Mixed Residential"]
AccessType = Literal["curbside", "walkout", "dumpster"]


class TrashService(WireModel):
    frequency: Literal["weekly", "twice-weekly", "three-times-weekly"] = "weekly"
    required: bool = True


class RecyclingService(WireModel):
    frequency: Literal["weekly", "bi-weekly"] = "bi-weekly"
    required: bool = True


class YardWasteService(WireModel):
    frequency: Literal["weekly", "bi-weekly", "seasonal"] = "weekly"
    required: bool = False


class ServiceConfiguration(WireModel):
    """Which streams are collected and how often."""

    trash: TrashService = Field(default_factory=TrashService)
    recycling: RecyclingService = Field(default_factory=RecyclingService)
    yard_waste: YardWasteService = Field(default_factory=YardWasteService)

    @property
    def required_count(self) -> int:
        return sum([self.trash.required, self.recycling.required, self.yard_waste.required])


class Coordinates(WireModel):
    lat: float | None = None
    lng: float | None = None
    address: str | None = None


class PricingRequest(WireModel):
    """A community's request for collection service.

    Field types are checked by pydantic; business limits (homes range,
    contract length, at least one service) are checked by
    ``engine.validation.validate_request`` so that every violation is
    reported together.
    """

    community_name: str
    location_name: str
    homes: int
    unit_type: UnitType = "Single Family Homes"

    services: ServiceConfiguration = Field(default_factory=ServiceConfiguration)

    access_type: AccessType = "curbside"
    is_gated: bool = False
    has_special_containers: bool = False
    special_requirements: list[str] = Field(default_factory=list)

    contract_length: int = Field(default=3, description="Contract length (years)")
    start_date: date = Field(default_factory=date.today)
    fuel_surcharge_allowed: bool = True

    coordinates: Coordinates | None = None


def build_rfp_request(
    community_name: str,
    location_name: str,
    homes: int,
    **overrides: Any,
) -> PricingRequest:
    """Build a request with the standard RFP defaults.

    Defaults: single-family homes, weekly trash + bi-weekly recycling,
    curbside, not gated, 3-year contract, fuel surcharge allowed.
    ``overrides`` accepts any ``PricingRequest`` field by its Python name.
    """
    return PricingRequest(
        community_name=community_name,
        location_name=location_name,
        homes=homes,
        **overrides,
    )

"""Serviceability check input: one candidate address."""

from typing import Literal

from pydantic import Field

from wasteops_pricing.config.wire import WireModel

CustomerType = Literal["HOA", "Single-Family"]


class ServiceabilityRequest(WireModel):
    """Candidate address to score against the existing customer base."""

    address: str = Field(min_length=1)
    customer_type: CustomerType
    latitude: float
    longitude: float
    number_of_carts: int | None = Field(default=None, ge=0, description="Carts requested (default 1)")
    special_notes: str | None = None

    @property
    def carts(self) -> int:
        return self.number_of_carts or 1

"""Pricing configuration: margin targets, unit costs, premiums, volume tiers."""

from pydantic import Field

from wasteops_pricing.config.wire import WireModel


# Base monthly price per unit by unit type (market research based).
BASE_UNIT_PRICING: dict[str, float] = {
    "Single Family Homes": 37.03,
    "Townhomes": 21.31,
    "Condos": 75.00,
    "Mixed Residential": 32.50,
}

# Market benchmark per unit; condos are benchmarked per unit, not per container.
MARKET_BENCHMARKS: dict[str, float] = {
    "Single Family Homes": 37.03,
    "Townhomes": 21.31,
    "Condos": 57.04,
    "Mixed Residential": 32.50,
}


class PremiumRules(WireModel):
    """Surcharges added on top of the base unit price."""

    walkout_premium_percent: float = Field(
        default=0.33, ge=0, le=1.0, description="Walk-out service premium as a fraction of base price",
    )
    gated_access_surcharge: float = Field(default=3.50, ge=0, description="Flat gated-access surcharge ($/unit)")
    special_container_surcharge: float = Field(
        default=2.00, ge=0, description="Flat special-container surcharge ($/unit)",
    )


class VolumeDiscountTier(WireModel):
    """One volume tier: applies when homes >= ``min_homes``."""

    min_homes: int = Field(ge=1)
    discount_percent: float = Field(ge=0, le=1.0, description="Fraction of base price")


class VolumeDiscounts(WireModel):
    """Three-tier volume discount schedule, checked from tier3 down."""

    tier1: VolumeDiscountTier = Field(
        default_factory=lambda: VolumeDiscountTier(min_homes=100, discount_percent=0.03),
    )
    tier2: VolumeDiscountTier = Field(
        default_factory=lambda: VolumeDiscountTier(min_homes=250, discount_percent=0.05),
    )
    tier3: VolumeDiscountTier = Field(
        default_factory=lambda: VolumeDiscountTier(min_homes=500, discount_percent=0.08),
    )


class PricingConfig(WireModel):
    """Process-wide tunable constants for the pricing engine.

    Passed explicitly into every calculation. The running service keeps
    the current value in a ``PricingConfigStore``.
    """

    # --- Margin targets ---
    target_margin: float = Field(default=0.35, ge=0, le=1.0)
    minimum_margin: float = Field(default=0.15, ge=0, le=1.0)
    maximum_margin: float = Field(default=0.45, ge=0, le=1.0)

    # --- Benchmark tolerance ---
    benchmark_tolerance: float = Field(
        default=0.10, ge=0, le=1.0, description="Allowed |variance| vs. market benchmark (fraction)",
    )

    # --- Operational unit costs ---
    labor_rate_per_hour: float = Field(default=85.0, ge=0, description="Crew labor ($/hour)")
    fuel_cost_per_mile: float = Field(default=0.65, ge=0, description="Fuel ($/mile)")
    equipment_cost_per_hour: float = Field(default=25.0, ge=0, description="Truck + equipment ($/hour)")
    disposal_cost_per_ton: float = Field(default=45.0, ge=0, description="Landfill tipping fee ($/ton)")

    # --- Pricing rules ---
    premium_rules: PremiumRules = Field(default_factory=PremiumRules)
    volume_discounts: VolumeDiscounts = Field(default_factory=VolumeDiscounts)

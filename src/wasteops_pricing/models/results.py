"""Result types: the contract between engine, narrative, and API.

All monetary values are per month unless the name says otherwise.
Fields are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from wasteops_pricing.config.pricing import PricingConfig
from wasteops_pricing.config.wire import WireModel

ProximityBucket = Literal["close", "moderate", "far"]
RouteDensity = Literal["High", "Medium", "Low"]
ScoreStatus = Literal["excellent", "good", "poor"]
Level = Literal["high", "medium", "low"]
RecommendationType = Literal["bid", "bid-with-conditions", "do-not-bid"]
ServiceabilityRecommendation = Literal["Auto Approve", "Review Manually", "Decline"]


# ═══════════════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════════════

class ValidationIssue(WireModel):
    """One failed field check."""

    field: str
    message: str
    code: str


# ═══════════════════════════════════════════════════════════════════════════
# Operational analysis
# ═══════════════════════════════════════════════════════════════════════════

class FleetUtilization(WireModel):
    """Service-minute demand against the current fleet's daily capacity."""

    current_capacity: float
    """Truck-minutes available per day = trucks × hours × 60."""

    required_capacity: float
    """homes × service minutes per home."""

    utilization_percent: float
    additional_trucks_needed: int


class RouteAnalysis(WireModel):
    drive_time_minutes: float
    service_time_minutes: float
    total_time_per_visit: float
    proximity_score: ProximityBucket


class OperationalCosts(WireModel):
    labor_cost_per_month: float
    fuel_cost_per_month: float
    equipment_cost_per_month: float
    disposal_cost_per_month: float
    total_cost_per_month: float
    cost_per_unit: float


class OperationalAnalysis(WireModel):
    fleet_utilization: FleetUtilization
    route_analysis: RouteAnalysis
    operational_costs: OperationalCosts


# ═══════════════════════════════════════════════════════════════════════════
# Pricing breakdown
# ═══════════════════════════════════════════════════════════════════════════

class Premiums(WireModel):
    walkout: float = 0.0
    gated: float = 0.0
    special_containers: float = 0.0
    multiple_services: float = 0.0

    @property
    def total(self) -> float:
        return self.walkout + self.gated + self.special_containers + self.multiple_services


class Discounts(WireModel):
    volume: float = 0.0
    route_efficiency: float = 0.0

    @property
    def total(self) -> float:
        return self.volume + self.route_efficiency


class ServicesPricing(WireModel):
    """Share of the base price attributed to each required stream."""

    trash: float
    recycling: float
    yard_waste: float


class PricingBreakdown(WireModel):
    price_per_unit: float
    total_monthly_revenue: float
    base_price: float
    premiums: Premiums
    discounts: Discounts
    services_pricing: ServicesPricing
    margin_percent: float
    """Fraction, not percent: profit / revenue."""
    profit_per_unit: float
    total_monthly_profit: float


# ═══════════════════════════════════════════════════════════════════════════
# Recommendation & market validation
# ═══════════════════════════════════════════════════════════════════════════

class PricingRecommendation(WireModel):
    should_bid: bool
    confidence: Level
    recommendation_type: RecommendationType
    serviceability_score: int
    strategic_fit: Level
    reasoning: list[str]
    conditions: list[str]
    risk_flags: list[str]
    strategic_summary: str


class MarketValidation(WireModel):
    benchmark_price: float
    variance_percent: float
    is_within_benchmark: bool
    market_position: Literal["below", "competitive", "premium"]
    competitive_advantages: list[str]
    market_risks: list[str]
    validation_status: Literal["valid", "warning", "invalid"]
    validation_message: str


class PricingMetadata(WireModel):
    request_id: str
    timestamp: datetime
    version: str
    config: PricingConfig
    processing_time_ms: float
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


class PricingResponse(WireModel):
    """Complete output of one pricing calculation."""

    pricing: PricingBreakdown
    operations: OperationalAnalysis
    recommendation: PricingRecommendation
    validation: MarketValidation
    metadata: PricingMetadata


# ═══════════════════════════════════════════════════════════════════════════
# Serviceability
# ═══════════════════════════════════════════════════════════════════════════

class ProximitySubScore(WireModel):
    value: int
    status: ScoreStatus
    drive_time: int
    distance: float


class RouteIntegrationSubScore(WireModel):
    value: int
    status: ScoreStatus
    compatibility: Literal["seamless", "moderate", "deviation"]


class CustomerDensitySubScore(WireModel):
    value: int
    status: ScoreStatus
    customers_within_1_mile: int
    route_density: RouteDensity


class ProfitabilitySubScore(WireModel):
    value: int
    status: ScoreStatus
    monthly_profit: float
    margin_percentage: float


class ServiceabilityBreakdown(WireModel):
    proximity_score: ProximitySubScore
    route_integration: RouteIntegrationSubScore
    customer_density: CustomerDensitySubScore
    estimated_profitability: ProfitabilitySubScore

    @property
    def average(self) -> float:
        return (
            self.proximity_score.value
            + self.route_integration.value
            + self.customer_density.value
            + self.estimated_profitability.value
        ) / 4


class NearbyCustomer(WireModel):
    name: str
    distance: float
    drive_time: int
    type: str
    city: str | None = None


class ProximityDetails(WireModel):
    nearest_customers: list[NearbyCustomer]
    route_density: RouteDensity
    customers_within_1_mile: int


class ServiceabilityResponse(WireModel):
    """Complete output of one serviceability check."""

    address: str
    customer_type: Literal["HOA", "Single-Family"]
    serviceable: bool
    recommendation: ServiceabilityRecommendation
    suggested_price: float
    nearest_customer_distance: str
    drive_time_minutes: int
    reason: str
    breakdown: ServiceabilityBreakdown
    proximity_details: ProximityDetails

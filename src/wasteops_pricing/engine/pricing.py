"""Per-unit price: base by unit type, plus premiums, minus discounts.

Reads the operational analysis (proximity, total cost), so it runs after
``compute_operational_analysis``.
"""

from __future__ import annotations

from wasteops_pricing.config.pricing import BASE_UNIT_PRICING, PricingConfig
from wasteops_pricing.config.service_request import PricingRequest
from wasteops_pricing.models.results import (
    Discounts,
    OperationalAnalysis,
    Premiums,
    PricingBreakdown,
    ServicesPricing,
)

MULTI_SERVICE_PREMIUM_PERCENT = 0.05
ROUTE_EFFICIENCY_DISCOUNT_PERCENT = 0.03

# Share of the base price attributed to each stream
SERVICE_SHARES = {"trash": 0.60, "recycling": 0.25, "yard_waste": 0.15}


def base_price_for(unit_type: str) -> float:
    return BASE_UNIT_PRICING.get(unit_type, BASE_UNIT_PRICING["Single Family Homes"])


def compute_premiums(request: PricingRequest, base_price: float, config: PricingConfig) -> Premiums:
    rules = config.premium_rules
    premiums = Premiums()
    if request.access_type == "walkout":
        premiums.walkout = base_price * rules.walkout_premium_percent
    if request.is_gated:
        premiums.gated = rules.gated_access_surcharge
    if request.has_special_containers:
        premiums.special_containers = rules.special_container_surcharge

    service_count = request.services.required_count
    if service_count > 1:
        premiums.multiple_services = base_price * MULTI_SERVICE_PREMIUM_PERCENT * (service_count - 1)
    return premiums


def volume_discount_percent(homes: int, config: PricingConfig) -> float:
    """Discount fraction of the highest tier the community reaches."""
    tiers = config.volume_discounts
    for tier in (tiers.tier3, tiers.tier2, tiers.tier1):
        if homes >= tier.min_homes:
            return tier.discount_percent
    return 0.0


def compute_discounts(
    request: PricingRequest,
    operations: OperationalAnalysis,
    base_price: float,
    config: PricingConfig,
) -> Discounts:
    discounts = Discounts(volume=base_price * volume_discount_percent(request.homes, config))
    if operations.route_analysis.proximity_score == "close":
        discounts.route_efficiency = base_price * ROUTE_EFFICIENCY_DISCOUNT_PERCENT
    return discounts


def compute_services_pricing(request: PricingRequest, base_price: float) -> ServicesPricing:
    services = request.services
    return ServicesPricing(
        trash=base_price * SERVICE_SHARES["trash"] if services.trash.required else 0.0,
        recycling=base_price * SERVICE_SHARES["recycling"] if services.recycling.required else 0.0,
        yard_waste=base_price * SERVICE_SHARES["yard_waste"] if services.yard_waste.required else 0.0,
    )


def compute_pricing_breakdown(
    request: PricingRequest,
    operations: OperationalAnalysis,
    config: PricingConfig,
) -> PricingBreakdown:
    """Final price per unit, revenue, profit and margin.

    ``request.homes`` must be >= 1 (see ``validate_request``).
    """
    base_price = base_price_for(request.unit_type)
    premiums = compute_premiums(request, base_price, config)
    discounts = compute_discounts(request, operations, base_price, config)

    price_per_unit = (
        base_price
        + premiums.walkout
        + premiums.gated
        + premiums.special_containers
        + premiums.multiple_services
        - discounts.volume
        - discounts.route_efficiency
    )
    revenue = price_per_unit * request.homes
    profit = revenue - operations.operational_costs.total_cost_per_month
    margin = profit / revenue if revenue > 0 else 0.0

    return PricingBreakdown(
        price_per_unit=price_per_unit,
        total_monthly_revenue=revenue,
        base_price=base_price,
        premiums=premiums,
        discounts=discounts,
        services_pricing=compute_services_pricing(request, base_price),
        margin_percent=margin,
        profit_per_unit=profit / request.homes,
        total_monthly_profit=profit,
    )

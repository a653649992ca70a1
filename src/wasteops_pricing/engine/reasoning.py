"""Wording attached to engine results: reasons, flags, conditions, summaries.

Nothing here calculates; every function turns values the engine has
already produced into the sentences carried on the response.
"""

from __future__ import annotations

from wasteops_pricing.config.service_request import PricingRequest
from wasteops_pricing.engine.geo import round_half_up
from wasteops_pricing.models.results import OperationalAnalysis, PricingBreakdown

HOA_APPROVAL_REASON = (
    "HOA customers are automatically approved. "
    "HOAs provide consistent revenue and are always serviceable."
)

CONDITION_MESSAGES = {
    "negotiate_pricing": "Negotiate higher pricing for better margins",
    "plan_fleet_capacity": "Plan for additional fleet capacity",
    "optimize_route": "Consider route optimization opportunities",
}


def format_money(value: float) -> str:
    """Thousands separators, up to three decimals, no trailing zeros.

    3700 -> "3,700", 3777.06 -> "3,777.06", 1234.5678 -> "1,234.568".
    """
    return f"{round_half_up(value, 3):,.3f}".rstrip("0").rstrip(".")


# ═══════════════════════════════════════════════════════════════════════════
# Serviceability
# ═══════════════════════════════════════════════════════════════════════════

def describe_serviceability(recommendation: str, drive_time: int, customers_within_1_mile: int) -> str:
    if recommendation == "Auto Approve":
        return (
            f"Excellent location with {drive_time}-minute drive time to nearest customer. "
            "High route efficiency and strong profitability projections."
        )
    if recommendation == "Review Manually":
        return (
            f"Moderate location requiring {drive_time} minutes drive time. "
            f"{customers_within_1_mile} customers within 1 mile. "
            "Manual review recommended for route optimization."
        )
    return (
        f"Poor location with {drive_time}-minute drive time and limited route integration. "
        "Low profitability due to route inefficiency."
    )


# ═══════════════════════════════════════════════════════════════════════════
# Pricing recommendation text
# ═══════════════════════════════════════════════════════════════════════════

def _service_list(request: PricingRequest) -> str:
    services = request.services
    names = [
        name
        for name, required in (
            ("Trash", services.trash.required),
            ("Recycling", services.recycling.required),
            ("Yard Waste", services.yard_waste.required),
        )
        if required
    ]
    return " + ".join(names)


def format_reasoning(
    request: PricingRequest,
    pricing: PricingBreakdown,
    operations: OperationalAnalysis,
) -> list[str]:
    util = operations.fleet_utilization.utilization_percent
    route = operations.route_analysis
    margin = pricing.margin_percent
    return [
        f"Fleet utilization: {util:.1f}% ({'manageable' if util < 85 else 'high'})",
        f"Route efficiency: {route.drive_time_minutes:g} min drive time ({route.proximity_score} proximity)",
        f"Profit margin: {margin * 100:.1f}% ({'acceptable' if margin > 0.15 else 'low'})",
        f"Service complexity: {_service_list(request)}",
    ]


def format_risk_flags(flags: tuple[str, ...] | list[str], operations: OperationalAnalysis) -> list[str]:
    messages: list[str] = []
    for flag in flags:
        if flag == "additional_trucks":
            trucks = operations.fleet_utilization.additional_trucks_needed
            messages.append(f"⚠️ Requires {trucks} additional truck{'s' if trucks > 1 else ''}")
        elif flag == "low_margin":
            messages.append("⚠️ Low profitability - margin below 15%")
        elif flag == "distant_location":
            messages.append("⚠️ High routing burden - distant location")
        elif flag == "no_fuel_surcharge":
            messages.append("⚠️ No fuel surcharge protection")
    return messages


def format_conditions(conditions: tuple[str, ...] | list[str]) -> list[str]:
    return [CONDITION_MESSAGES[c] for c in conditions]


def format_strategic_summary(
    request: PricingRequest,
    pricing: PricingBreakdown,
    operations: OperationalAnalysis,
) -> str:
    margin = pricing.margin_percent
    util = operations.fleet_utilization.utilization_percent
    route = operations.route_analysis

    verdict = "RECOMMEND" if margin > 0.15 else "CAUTION"
    if margin > 0.20:
        profitability = "Excellent"
    elif margin > 0.15:
        profitability = "Good"
    else:
        profitability = "Poor"

    def tick(ok: bool) -> str:
        return "✅" if ok else "❌"

    lines = [
        f"### Strategic Analysis: {verdict}",
        "",
        f"**Community**: {request.community_name} ({request.homes} {request.unit_type})",
        f"**Pricing**: ${pricing.price_per_unit:.2f}/unit/month",
        f"**Monthly Revenue**: ${format_money(pricing.total_monthly_revenue)}",
        f"**Profit Margin**: {margin * 100:.1f}% ({profitability})",
        "",
        f"**Fleet Impact**: {util:.1f}% utilization",
        f"**Route Efficiency**: {route.drive_time_minutes:g} min drive time ({route.proximity_score})",
        f"**Service Complexity**: {'Walk-out' if request.access_type == 'walkout' else 'Curbside'} service",
        "",
        "**Key Factors**:",
        f"- {tick(margin > 0.15)} Profitability target met",
        f"- {tick(util < 85)} Fleet capacity available",
        f"- {tick(route.proximity_score == 'close')} Route efficiency optimal",
    ]
    return "\n".join(lines)


# ═══════════════════════════════════════════════════════════════════════════
# Market validation text
# ═══════════════════════════════════════════════════════════════════════════

def describe_competitive_advantages(request: PricingRequest, pricing: PricingBreakdown) -> list[str]:
    advantages = [
        "Established local presence",
        "Comprehensive service offerings",
        "Proven operational efficiency",
    ]
    if request.access_type == "walkout":
        advantages.append("Specialized walk-out service capability")
    if pricing.margin_percent > 0.20:
        advantages.append("Competitive pricing with healthy margins")
    return advantages


def describe_market_risks(request: PricingRequest, pricing: PricingBreakdown, variance_percent: float) -> list[str]:
    risks: list[str] = []
    if variance_percent > 10:
        risks.append("Pricing above market average - competitive pressure")
    if pricing.margin_percent < 0.15:
        risks.append("Low margins limit pricing flexibility")
    if request.contract_length > 5:
        risks.append("Long-term contract limits pricing adjustments")
    return risks


def format_validation_message(is_within_benchmark: bool, variance_percent: float, market_position: str) -> str:
    if is_within_benchmark:
        sign = "+" if variance_percent > 0 else ""
        return f"✅ Pricing within market benchmark range ({sign}{variance_percent:.1f}%)"
    if variance_percent > 0:
        return f"⚠️ Pricing exceeds market benchmark by {variance_percent:.1f}% ({market_position} positioning)"
    return f"⚠️ Pricing below market benchmark by {abs(variance_percent):.1f}% ({market_position} positioning)"

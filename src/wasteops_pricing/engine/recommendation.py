"""Bid / no-bid decision from margin, fleet load, and route proximity.

Everything here is numeric or a fixed code; the human-readable reasoning
lives in ``engine.reasoning``.
"""

from __future__ import annotations

from dataclasses import dataclass

from wasteops_pricing.config.service_request import PricingRequest
from wasteops_pricing.models.results import OperationalAnalysis, PricingBreakdown

# Risk flag codes
ADDITIONAL_TRUCKS = "additional_trucks"
LOW_MARGIN = "low_margin"
DISTANT_LOCATION = "distant_location"
NO_FUEL_SURCHARGE = "no_fuel_surcharge"

# Condition codes
NEGOTIATE_PRICING = "negotiate_pricing"
PLAN_FLEET_CAPACITY = "plan_fleet_capacity"
OPTIMIZE_ROUTE = "optimize_route"

ACCEPTABLE_MARGIN = 0.15
DO_NOT_BID_MARGIN = 0.05
MAX_UTILIZATION_PERCENT = 120


@dataclass(frozen=True)
class RecommendationDecision:
    """Structured outcome; formatted into a ``PricingRecommendation`` later."""

    recommendation_type: str
    confidence: str
    serviceability_score: int
    strategic_fit: str
    risk_flags: tuple[str, ...]
    conditions: tuple[str, ...]

    @property
    def should_bid(self) -> bool:
        return self.recommendation_type != "do-not-bid"


def compute_serviceability_score(
    margin: float,
    utilization_percent: float,
    proximity: str,
) -> int:
    """0-100: profitability 40, fleet capacity 30, route 20, base 10."""
    score = 0

    if margin > 0.25:
        score += 40
    elif margin > 0.15:
        score += 30
    elif margin > 0.05:
        score += 20
    elif margin > 0:
        score += 10

    if utilization_percent < 85:
        score += 30
    elif utilization_percent < 100:
        score += 20
    elif utilization_percent < 120:
        score += 10

    if proximity == "close":
        score += 20
    elif proximity == "moderate":
        score += 10

    # Standard service complexity
    score += 10

    return min(100, score)


def determine_strategic_fit(margin: float, utilization_percent: float) -> str:
    if margin > 0.25 and utilization_percent < 85:
        return "high"
    if margin > 0.15 and utilization_percent < 100:
        return "medium"
    return "low"


def collect_risk_flags(
    request: PricingRequest,
    pricing: PricingBreakdown,
    operations: OperationalAnalysis,
) -> list[str]:
    """Independent risk checks; order is stable for display."""
    flags: list[str] = []
    if operations.fleet_utilization.additional_trucks_needed > 0:
        flags.append(ADDITIONAL_TRUCKS)
    if pricing.margin_percent < ACCEPTABLE_MARGIN:
        flags.append(LOW_MARGIN)
    if operations.route_analysis.proximity_score == "far":
        flags.append(DISTANT_LOCATION)
    if not request.fuel_surcharge_allowed:
        flags.append(NO_FUEL_SURCHARGE)
    return flags


def collect_conditions(pricing: PricingBreakdown, operations: OperationalAnalysis) -> list[str]:
    conditions: list[str] = []
    if pricing.margin_percent < ACCEPTABLE_MARGIN:
        conditions.append(NEGOTIATE_PRICING)
    if operations.fleet_utilization.additional_trucks_needed > 0:
        conditions.append(PLAN_FLEET_CAPACITY)
    if operations.route_analysis.proximity_score == "far":
        conditions.append(OPTIMIZE_ROUTE)
    return conditions


def determine_recommendation_type(margin: float, utilization_percent: float, risk_flag_count: int) -> str:
    if margin < DO_NOT_BID_MARGIN or utilization_percent > MAX_UTILIZATION_PERCENT:
        return "do-not-bid"
    if margin < ACCEPTABLE_MARGIN or risk_flag_count >= 2:
        return "bid-with-conditions"
    return "bid"


def determine_confidence(margin: float, utilization_percent: float, risk_flag_count: int) -> str:
    if margin > 0.20 and utilization_percent < 85 and risk_flag_count == 0:
        return "high"
    if margin > 0.10 and utilization_percent < 100 and risk_flag_count <= 1:
        return "medium"
    return "low"


def build_decision(
    request: PricingRequest,
    pricing: PricingBreakdown,
    operations: OperationalAnalysis,
) -> RecommendationDecision:
    margin = pricing.margin_percent
    utilization = operations.fleet_utilization.utilization_percent
    flags = collect_risk_flags(request, pricing, operations)
    return RecommendationDecision(
        recommendation_type=determine_recommendation_type(margin, utilization, len(flags)),
        confidence=determine_confidence(margin, utilization, len(flags)),
        serviceability_score=compute_serviceability_score(
            margin, utilization, operations.route_analysis.proximity_score,
        ),
        strategic_fit=determine_strategic_fit(margin, utilization),
        risk_flags=tuple(flags),
        conditions=tuple(collect_conditions(pricing, operations)),
    )

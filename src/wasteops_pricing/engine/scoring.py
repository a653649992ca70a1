"""Serviceability sub-score classifiers.

Each classifier is a threshold ladder mapping one continuous input to a
discrete score + status. The four values are averaged into the overall
recommendation.
"""

from __future__ import annotations

from dataclasses import dataclass

from wasteops_pricing.engine.geo import round_half_up

# Per-minute and per-visit cost model for a single weekly pickup.
LABOR_COST_PER_MINUTE = 0.75
FUEL_COST_PER_MINUTE = 0.20
EQUIPMENT_COST_PER_SERVICE = 1.50
SERVICE_MINUTES_PER_STOP = 3
WEEKS_PER_MONTH = 4.33

AUTO_APPROVE_THRESHOLD = 80
REVIEW_THRESHOLD = 50


@dataclass(frozen=True)
class SubScore:
    value: int
    status: str


@dataclass(frozen=True)
class DensityScore(SubScore):
    route_density: str


@dataclass(frozen=True)
class RouteIntegrationScore(SubScore):
    compatibility: str


@dataclass(frozen=True)
class ProfitabilityScore(SubScore):
    monthly_profit: float
    """Rounded to whole dollars."""

    margin_percentage: float
    """Percent, rounded to one decimal."""


def score_customer_density(customers_within_1_mile: int) -> DensityScore:
    """Density score; also decides the route-density bucket."""
    if customers_within_1_mile >= 10:
        return DensityScore(95, "excellent", "High")
    if customers_within_1_mile >= 5:
        return DensityScore(75, "good", "Medium")
    if customers_within_1_mile >= 2:
        return DensityScore(50, "good", "Medium")
    return DensityScore(20, "poor", "Low")


def score_proximity(drive_time: float, nearest_distance: float) -> SubScore:
    if drive_time <= 5:
        score, status = 95, "excellent"
    elif drive_time <= 10:
        score, status = 80, "good"
    elif drive_time <= 15:
        score, status = 60, "good"
    else:
        score, status = 30, "poor"

    # Distance penalty applies on top of the drive-time ladder
    if nearest_distance > 2:
        score -= 15
        status = "good" if score > 70 else "poor"

    return SubScore(max(score, 0), status)


def score_route_integration(customers_within_1_mile: int, drive_time: float) -> RouteIntegrationScore:
    if customers_within_1_mile >= 8 and drive_time <= 8:
        return RouteIntegrationScore(95, "excellent", "seamless")
    if customers_within_1_mile >= 4 and drive_time <= 12:
        return RouteIntegrationScore(75, "good", "moderate")
    if customers_within_1_mile >= 2:
        return RouteIntegrationScore(55, "good", "moderate")
    return RouteIntegrationScore(25, "poor", "deviation")


def score_profitability(suggested_price: float, drive_time: float) -> ProfitabilityScore:
    """Margin of a weekly pickup at ``suggested_price`` per visit."""
    service_minutes = drive_time + SERVICE_MINUTES_PER_STOP
    cost_per_visit = (
        service_minutes * (LABOR_COST_PER_MINUTE + FUEL_COST_PER_MINUTE)
        + EQUIPMENT_COST_PER_SERVICE
    )
    monthly_cost = cost_per_visit * WEEKS_PER_MONTH
    monthly_revenue = suggested_price * WEEKS_PER_MONTH
    monthly_profit = monthly_revenue - monthly_cost
    margin_pct = (monthly_profit / monthly_revenue) * 100

    if margin_pct >= 60:
        score, status = 95, "excellent"
    elif margin_pct >= 45:
        score, status = 80, "good"
    elif margin_pct >= 30:
        score, status = 60, "good"
    else:
        score, status = 30, "poor"

    return ProfitabilityScore(
        value=score,
        status=status,
        monthly_profit=round_half_up(monthly_profit),
        margin_percentage=round_half_up(margin_pct, 1),
    )


def overall_recommendation(average_score: float) -> str:
    if average_score >= AUTO_APPROVE_THRESHOLD:
        return "Auto Approve"
    if average_score >= REVIEW_THRESHOLD:
        return "Review Manually"
    return "Decline"

"""Serviceability check: score a candidate address against existing customers.

Flow for a single-family request:
  distances → customers within 1 mile → density bucket → drive time to
  nearest → suggested price → four sub-scores → average → recommendation

HOA requests skip all of this and are approved at a fixed price.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from wasteops_pricing.config.serviceability import ServiceabilityRequest
from wasteops_pricing.engine.geo import distances_to_customers, estimate_drive_time, round_half_up
from wasteops_pricing.engine.reasoning import HOA_APPROVAL_REASON, describe_serviceability
from wasteops_pricing.engine.scoring import (
    overall_recommendation,
    score_customer_density,
    score_profitability,
    score_proximity,
    score_route_integration,
)
from wasteops_pricing.engine.suggested_price import calculate_suggested_price
from wasteops_pricing.models.customers import CustomerRecord
from wasteops_pricing.models.results import (
    CustomerDensitySubScore,
    NearbyCustomer,
    ProfitabilitySubScore,
    ProximityDetails,
    ProximitySubScore,
    RouteIntegrationSubScore,
    ServiceabilityBreakdown,
    ServiceabilityResponse,
)

HOA_PRICE = 28.0
NEARBY_RADIUS_MILES = 1.0
NEAREST_CUSTOMERS_SHOWN = 5

# Used as the nearest distance when there are no located customers
NO_CUSTOMER_DISTANCE_MILES = 999.0


def hoa_auto_approval(request: ServiceabilityRequest) -> ServiceabilityResponse:
    """HOAs bring consistent bulk revenue and are always approved."""
    return ServiceabilityResponse(
        address=request.address,
        customer_type="HOA",
        serviceable=True,
        recommendation="Auto Approve",
        suggested_price=HOA_PRICE,
        nearest_customer_distance="N/A - HOA Auto-Approved",
        drive_time_minutes=0,
        reason=HOA_APPROVAL_REASON,
        breakdown=ServiceabilityBreakdown(
            proximity_score=ProximitySubScore(value=100, status="excellent", drive_time=0, distance=0),
            route_integration=RouteIntegrationSubScore(value=100, status="excellent", compatibility="seamless"),
            customer_density=CustomerDensitySubScore(
                value=100, status="excellent", customers_within_1_mile=0, route_density="High",
            ),
            estimated_profitability=ProfitabilitySubScore(
                value=100, status="excellent", monthly_profit=85, margin_percentage=70,
            ),
        ),
        proximity_details=ProximityDetails(nearest_customers=[], route_density="High", customers_within_1_mile=0),
    )


def check_serviceability(
    request: ServiceabilityRequest,
    customers: Sequence[CustomerRecord],
) -> ServiceabilityResponse:
    """Score ``request`` against the existing customer snapshot."""
    if request.customer_type == "HOA":
        return hoa_auto_approval(request)

    distances = distances_to_customers(request.latitude, request.longitude, customers)
    order = np.argsort(distances, kind="stable")
    located = order[np.isfinite(distances[order])]

    within_1_mile = int(np.count_nonzero(distances <= NEARBY_RADIUS_MILES))
    density = score_customer_density(within_1_mile)
    route_density = density.route_density

    nearest_distance = float(distances[located[0]]) if located.size else NO_CUSTOMER_DISTANCE_MILES
    drive_time = estimate_drive_time(nearest_distance, route_density)

    nearest_customers = [
        NearbyCustomer(
            name=customers[i].hoa_name,
            distance=round_half_up(float(distances[i]), 2),
            drive_time=estimate_drive_time(float(distances[i]), route_density),
            type=customers[i].customer_type,
            city=customers[i].city_state_zip[0],
        )
        for i in located[:NEAREST_CUSTOMERS_SHOWN]
    ]

    suggested_price = calculate_suggested_price(
        route_density, within_1_mile, drive_time, request.carts,
    )

    proximity = score_proximity(drive_time, nearest_distance)
    route = score_route_integration(within_1_mile, drive_time)
    profitability = score_profitability(suggested_price, drive_time)

    rounded_distance = round_half_up(nearest_distance, 2)
    breakdown = ServiceabilityBreakdown(
        proximity_score=ProximitySubScore(
            value=proximity.value, status=proximity.status, drive_time=drive_time, distance=rounded_distance,
        ),
        route_integration=RouteIntegrationSubScore(
            value=route.value, status=route.status, compatibility=route.compatibility,
        ),
        customer_density=CustomerDensitySubScore(
            value=density.value,
            status=density.status,
            customers_within_1_mile=within_1_mile,
            route_density=route_density,
        ),
        estimated_profitability=ProfitabilitySubScore(
            value=profitability.value,
            status=profitability.status,
            monthly_profit=profitability.monthly_profit,
            margin_percentage=profitability.margin_percentage,
        ),
    )

    recommendation = overall_recommendation(breakdown.average)

    return ServiceabilityResponse(
        address=request.address,
        customer_type="Single-Family",
        serviceable=recommendation != "Decline",
        recommendation=recommendation,
        suggested_price=suggested_price,
        nearest_customer_distance=f"{format_miles(rounded_distance)} miles",
        drive_time_minutes=drive_time,
        reason=describe_serviceability(recommendation, drive_time, within_1_mile),
        breakdown=breakdown,
        proximity_details=ProximityDetails(
            nearest_customers=nearest_customers,
            route_density=route_density,
            customers_within_1_mile=within_1_mile,
        ),
    )


def format_miles(miles: float) -> str:
    """2-decimal distance without trailing zeros: 0.50 -> "0.5", 999.0 -> "999"."""
    return f"{miles:.2f}".rstrip("0").rstrip(".")

"""Operational analysis: service time, drive time, fleet load, monthly costs.

Pure arithmetic: PricingRequest + PricingConfig → OperationalAnalysis.
"""

from __future__ import annotations

import math

from wasteops_pricing.config.pricing import PricingConfig
from wasteops_pricing.config.service_request import PricingRequest
from wasteops_pricing.models.results import (
    FleetUtilization,
    OperationalAnalysis,
    OperationalCosts,
    RouteAnalysis,
)

# Current fleet
FLEET_TRUCKS = 3
SHIFT_HOURS = 8

# Cost-model assumptions
ROUND_TRIP_MILES_FACTOR = 15
WEEKS_PER_MONTH = 4.33
TONS_PER_HOME = 0.3

DEFAULT_DRIVE_MINUTES = 25
# Location keywords → estimated drive time from the yard (minutes)
LOCATION_DRIVE_MINUTES: list[tuple[tuple[str, ...], int]] = [
    (("fairfax", "arlington"), 15),
    (("loudoun", "prince william"), 30),
]


def compute_service_time(request: PricingRequest) -> float:
    """Minutes at the curb per home."""
    minutes = 1.5
    if request.services.recycling.required:
        minutes += 0.5
    if request.services.yard_waste.required:
        minutes += 0.7
    if request.access_type == "walkout":
        minutes += 1.0
    if request.is_gated:
        minutes += 0.3
    return minutes


def estimate_location_drive_time(request: PricingRequest) -> int:
    """Drive time from the yard, estimated from the location name.

    Requests that carry coordinates get the default estimate; there is no
    routing lookup behind them yet.
    """
    coords = request.coordinates
    if coords is not None and coords.lat and coords.lng:
        return DEFAULT_DRIVE_MINUTES

    location = request.location_name.lower()
    for keywords, minutes in LOCATION_DRIVE_MINUTES:
        if any(k in location for k in keywords):
            return minutes
    return DEFAULT_DRIVE_MINUTES


def classify_proximity(drive_time_minutes: float) -> str:
    if drive_time_minutes <= 15:
        return "close"
    if drive_time_minutes <= 30:
        return "moderate"
    return "far"


def compute_fleet_utilization(homes: int, service_time_minutes: float) -> FleetUtilization:
    """Daily service minutes required vs. what the current fleet can run."""
    shift_minutes = SHIFT_HOURS * 60
    current_capacity = FLEET_TRUCKS * shift_minutes
    required_capacity = homes * service_time_minutes
    utilization_percent = required_capacity / current_capacity * 100
    additional_trucks = max(0, math.ceil((required_capacity - current_capacity) / shift_minutes))
    return FleetUtilization(
        current_capacity=current_capacity,
        required_capacity=required_capacity,
        utilization_percent=utilization_percent,
        additional_trucks_needed=additional_trucks,
    )


def compute_operational_costs(
    homes: int,
    drive_time_minutes: float,
    service_time_minutes: float,
    config: PricingConfig,
) -> OperationalCosts:
    """Monthly labor, fuel, equipment, and disposal cost for the community."""
    total_time_per_visit = drive_time_minutes + service_time_minutes
    total_monthly_hours = total_time_per_visit * homes / 60

    labor = total_monthly_hours * config.labor_rate_per_hour
    fuel = (
        (drive_time_minutes * 2 / 60)
        * config.fuel_cost_per_mile
        * ROUND_TRIP_MILES_FACTOR
        * WEEKS_PER_MONTH
    )
    equipment = total_monthly_hours * config.equipment_cost_per_hour
    disposal = homes * TONS_PER_HOME * config.disposal_cost_per_ton

    total = labor + fuel + equipment + disposal
    return OperationalCosts(
        labor_cost_per_month=labor,
        fuel_cost_per_month=fuel,
        equipment_cost_per_month=equipment,
        disposal_cost_per_month=disposal,
        total_cost_per_month=total,
        cost_per_unit=total / homes,
    )


def compute_operational_analysis(request: PricingRequest, config: PricingConfig) -> OperationalAnalysis:
    service_time = compute_service_time(request)
    drive_time = estimate_location_drive_time(request)
    return OperationalAnalysis(
        fleet_utilization=compute_fleet_utilization(request.homes, service_time),
        route_analysis=RouteAnalysis(
            drive_time_minutes=drive_time,
            service_time_minutes=service_time,
            total_time_per_visit=drive_time + service_time,
            proximity_score=classify_proximity(drive_time),
        ),
        operational_costs=compute_operational_costs(request.homes, drive_time, service_time, config),
    )

"""Shared test fixtures: default config, standard requests, synthetic customers."""

from __future__ import annotations

import json
import math

import pytest

from wasteops_pricing.config import PricingConfig, PricingRequest, ServiceabilityRequest, build_rfp_request
from wasteops_pricing.engine.geo import EARTH_RADIUS_MILES
from wasteops_pricing.models.customers import CustomerRecord

# Candidate address used by the serviceability fixtures (Fairfax, VA)
ORIGIN_LAT = 38.8462
ORIGIN_LNG = -77.3064


def miles_north(miles: float) -> float:
    """Latitude offset that puts a point exactly ``miles`` due north."""
    return math.degrees(miles / EARTH_RADIUS_MILES)


def make_customer(name: str, lat: float | None, lng: float | None, **extra) -> CustomerRecord:
    return CustomerRecord.model_validate({
        "HOA Name": name,
        "latitude": lat,
        "longitude": lng,
        "Type": extra.pop("type", "HOA"),
        **extra,
    })


@pytest.fixture
def config() -> PricingConfig:
    return PricingConfig()


@pytest.fixture
def low_cost_config() -> PricingConfig:
    """Cheap labor and equipment so the default request clears every margin bar."""
    return PricingConfig(labor_rate_per_hour=10, equipment_cost_per_hour=5, disposal_cost_per_ton=5)


@pytest.fixture
def sfh_request() -> PricingRequest:
    """100 single-family homes, trash + recycling, curbside, 25-minute drive."""
    return build_rfp_request("Maple Ridge", "Springfield, VA", 100)


@pytest.fixture
def townhome_request() -> PricingRequest:
    """Walk-out, gated, all three streams, Arlington (15-minute drive)."""
    return build_rfp_request(
        "Courthouse Commons",
        "Arlington, VA",
        120,
        unit_type="Townhomes",
        access_type="walkout",
        is_gated=True,
        services={"trash": {"required": True}, "recycling": {"required": True}, "yard_waste": {"required": True}},
    )


@pytest.fixture
def single_family_check() -> ServiceabilityRequest:
    return ServiceabilityRequest(
        address="4102 Willow Creek Dr Fairfax VA 22030",
        customer_type="Single-Family",
        latitude=ORIGIN_LAT,
        longitude=ORIGIN_LNG,
    )


@pytest.fixture
def hoa_check() -> ServiceabilityRequest:
    return ServiceabilityRequest(
        address="1 Commons Way Fairfax VA 22030",
        customer_type="HOA",
        latitude=ORIGIN_LAT,
        longitude=ORIGIN_LNG,
    )


@pytest.fixture
def dense_customers() -> list[CustomerRecord]:
    """12 customers ~0.069 mi north of the origin: High density, 2-minute drive."""
    lat = ORIGIN_LAT + 0.001
    return [make_customer(f"Neighbor {i}", lat, ORIGIN_LNG) for i in range(12)]


@pytest.fixture
def distant_customer() -> list[CustomerRecord]:
    """One customer exactly 3 miles north: Low density, 8-minute drive."""
    return [make_customer("Far Acres HOA", ORIGIN_LAT + miles_north(3.0), ORIGIN_LNG)]


@pytest.fixture
def customers_file(tmp_path):
    """Snapshot file in the export format (string numbers, column-name keys)."""
    records = [
        {
            "HOA Name": "Willow Creek HOA",
            "Full Address": "4100 Willow Creek Dr Fairfax VA 22030",
            "latitude": str(ORIGIN_LAT + 0.001),
            "longitude": str(ORIGIN_LNG),
            "Type": "HOA",
            "Monthly Revenue": "$4,812.00",
            "Number of Units": "130",
            "Average Completion Time in Minutes": "95",
            "Service Status": "Serviced",
            "Unit Type": "Single Family",
        },
        {
            "HOA Name": "R. Chen",
            "Full Address": "9 Unmapped Ct Burke VA 22015",
            "latitude": "",
            "longitude": "",
            "Type": "Subscription",
            "Monthly Revenue": "$34.00",
            "Number of Units": "1",
            "Service Status": "Active",
            "Unit Type": "Single Family",
        },
    ]
    path = tmp_path / "customers.json"
    path.write_text(json.dumps(records))
    return path

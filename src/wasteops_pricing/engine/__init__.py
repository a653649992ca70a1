"""Engine: pure calculators for serviceability and pricing."""

from wasteops_pricing.engine.geo import estimate_drive_time, haversine_miles
from wasteops_pricing.engine.serviceability import check_serviceability
from wasteops_pricing.engine.suggested_price import calculate_suggested_price
from wasteops_pricing.engine.operations import compute_operational_analysis
from wasteops_pricing.engine.pricing import compute_pricing_breakdown
from wasteops_pricing.engine.recommendation import build_decision, determine_recommendation_type
from wasteops_pricing.engine.validation import validate_request
from wasteops_pricing.engine.orchestrator import calculate_pricing

__all__ = [
    "haversine_miles",
    "estimate_drive_time",
    "check_serviceability",
    "calculate_suggested_price",
    "compute_operational_analysis",
    "compute_pricing_breakdown",
    "build_decision",
    "determine_recommendation_type",
    "validate_request",
    "calculate_pricing",
]

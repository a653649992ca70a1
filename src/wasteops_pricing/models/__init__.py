"""Result models and the customer snapshot."""

from wasteops_pricing.models.customers import CustomerCache, CustomerRecord, load_customers
from wasteops_pricing.models.results import (
    MarketValidation,
    OperationalAnalysis,
    PricingBreakdown,
    PricingRecommendation,
    PricingResponse,
    ServiceabilityResponse,
    ValidationIssue,
)

__all__ = [
    "CustomerCache",
    "CustomerRecord",
    "load_customers",
    "MarketValidation",
    "OperationalAnalysis",
    "PricingBreakdown",
    "PricingRecommendation",
    "PricingResponse",
    "ServiceabilityResponse",
    "ValidationIssue",
]

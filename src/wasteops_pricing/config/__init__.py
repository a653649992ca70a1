"""Configuration models: pricing constants, request inputs, settings."""

from wasteops_pricing.config.pricing import (
    BASE_UNIT_PRICING,
    MARKET_BENCHMARKS,
    PremiumRules,
    PricingConfig,
    VolumeDiscounts,
    VolumeDiscountTier,
)
from wasteops_pricing.config.service_request import (
    Coordinates,
    PricingRequest,
    ServiceConfiguration,
    build_rfp_request,
)
from wasteops_pricing.config.serviceability import ServiceabilityRequest
from wasteops_pricing.config.settings import Settings, get_settings
from wasteops_pricing.config.store import PricingConfigStore, load_pricing_config

__all__ = [
    "BASE_UNIT_PRICING",
    "MARKET_BENCHMARKS",
    "PremiumRules",
    "PricingConfig",
    "VolumeDiscounts",
    "VolumeDiscountTier",
    "Coordinates",
    "PricingRequest",
    "ServiceConfiguration",
    "build_rfp_request",
    "ServiceabilityRequest",
    "Settings",
    "get_settings",
    "PricingConfigStore",
    "load_pricing_config",
]

"""Benchmark comparison of the computed unit price."""

from __future__ import annotations

from dataclasses import dataclass

from wasteops_pricing.config.pricing import MARKET_BENCHMARKS, PricingConfig

COMPETITIVE_BAND_PERCENT = 5
INVALID_VARIANCE_PERCENT = 20


@dataclass(frozen=True)
class MarketComparison:
    benchmark_price: float
    variance_percent: float
    is_within_benchmark: bool
    market_position: str
    validation_status: str


def benchmark_for(unit_type: str) -> float:
    return MARKET_BENCHMARKS.get(unit_type, MARKET_BENCHMARKS["Single Family Homes"])


def compare_to_market(unit_type: str, price_per_unit: float, config: PricingConfig) -> MarketComparison:
    benchmark = benchmark_for(unit_type)
    variance = (price_per_unit - benchmark) / benchmark * 100
    within = abs(variance) <= config.benchmark_tolerance * 100

    if variance < -COMPETITIVE_BAND_PERCENT:
        position = "below"
    elif variance > COMPETITIVE_BAND_PERCENT:
        position = "premium"
    else:
        position = "competitive"

    if within:
        status = "valid"
    elif abs(variance) > INVALID_VARIANCE_PERCENT:
        status = "invalid"
    else:
        status = "warning"

    return MarketComparison(
        benchmark_price=benchmark,
        variance_percent=variance,
        is_within_benchmark=within,
        market_position=position,
        validation_status=status,
    )

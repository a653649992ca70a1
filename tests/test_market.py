"""Tests for engine/market.py: benchmark variance, position, status."""

from __future__ import annotations

import pytest

from wasteops_pricing.config import MARKET_BENCHMARKS, PricingConfig
from wasteops_pricing.engine.market import benchmark_for, compare_to_market

SFH = "Single Family Homes"


class TestBenchmarks:

    def test_condos_benchmarked_per_unit(self):
        assert benchmark_for("Condos") == 57.04

    def test_unknown_unit_falls_back(self):
        assert benchmark_for("Mobile Homes") == MARKET_BENCHMARKS[SFH]


class TestCompareToMarket:

    def test_default_request_price(self, config):
        # (37.7706 − 37.03) / 37.03 = +2.0%
        market = compare_to_market(SFH, 37.7706, config)
        assert market.variance_percent == pytest.approx(2.0)
        assert market.is_within_benchmark is True
        assert market.market_position == "competitive"
        assert market.validation_status == "valid"

    def test_premium_but_within_tolerance(self, config):
        market = compare_to_market(SFH, 37.03 * 1.07, config)
        assert market.market_position == "premium"
        assert market.validation_status == "valid"

    def test_warning_band(self, config):
        market = compare_to_market(SFH, 37.03 * 1.15, config)
        assert market.is_within_benchmark is False
        assert market.validation_status == "warning"

    def test_below_market(self, config):
        market = compare_to_market(SFH, 37.03 * 0.94, config)
        assert market.market_position == "below"
        assert market.validation_status == "valid"

    def test_invalid_far_below(self, config):
        assert compare_to_market(SFH, 37.03 * 0.75, config).validation_status == "invalid"

    def test_townhome_walkout_is_invalid(self, config):
        # 32.6947 vs 21.31 → +53.4%
        market = compare_to_market("Townhomes", 32.6947, config)
        assert market.variance_percent == pytest.approx(53.42, abs=0.01)
        assert market.market_position == "premium"
        assert market.validation_status == "invalid"

    def test_tolerance_from_config(self):
        strict = PricingConfig(benchmark_tolerance=0.05)
        assert compare_to_market(SFH, 37.03 * 1.07, strict).validation_status == "warning"

"""Tests for api/narrative.py: plain-text quote and serviceability summaries."""

from __future__ import annotations

from wasteops_pricing.api.narrative import generate_pricing_narrative, generate_serviceability_narrative
from wasteops_pricing.engine.orchestrator import calculate_pricing
from wasteops_pricing.engine.serviceability import check_serviceability


class TestPlainTextSummaries:

    def test_pricing_narrative(self, sfh_request, config):
        response = calculate_pricing(sfh_request, config)
        text = generate_pricing_narrative(response, sfh_request.community_name)
        assert "PRICING QUOTE: Maple Ridge" in text
        assert "Price per unit: $37.77/month" in text
        assert "Recommendation: DO-NOT-BID" in text
        assert "RISKS & CONDITIONS" in text
        assert "=" * 60 in text

    def test_pricing_narrative_without_risks(self, sfh_request, low_cost_config):
        text = generate_pricing_narrative(calculate_pricing(sfh_request, low_cost_config))
        assert text.splitlines()[1] == "PRICING QUOTE"
        assert "RISKS & CONDITIONS" not in text

    def test_serviceability_narrative(self, single_family_check, distant_customer):
        result = check_serviceability(single_family_check, distant_customer)
        text = generate_serviceability_narrative(result)
        assert f"SERVICEABILITY: {single_family_check.address}" in text
        assert "Recommendation: Review Manually" in text
        assert "Suggested price: $41.00/month" in text
        assert "Nearest customer: 3 miles (8 min drive)" in text
        assert "65  (poor)" in text

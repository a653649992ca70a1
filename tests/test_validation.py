"""Tests for engine/validation.py: business-rule checks on pricing requests."""

from __future__ import annotations

import pytest

from wasteops_pricing.config import build_rfp_request
from wasteops_pricing.engine.validation import validate_request


def _codes(request) -> list[tuple[str, str]]:
    return [(issue.field, issue.code) for issue in validate_request(request)]


class TestValidateRequest:

    def test_valid_request(self, sfh_request):
        assert validate_request(sfh_request) == []

    @pytest.mark.parametrize("name", ["", "   "])
    def test_community_name_required(self, name):
        assert _codes(build_rfp_request(name, "Fairfax", 100)) == [("communityName", "REQUIRED_FIELD")]

    @pytest.mark.parametrize("homes", [0, -5])
    def test_homes_must_be_positive(self, homes):
        assert _codes(build_rfp_request("X", "Fairfax", homes)) == [("homes", "INVALID_VALUE")]

    def test_homes_limit(self):
        issues = validate_request(build_rfp_request("X", "Fairfax", 10_001))
        assert [(i.field, i.code) for i in issues] == [("homes", "EXCEEDS_LIMIT")]
        assert issues[0].message == "Number of homes exceeds maximum limit (10,000)"

    def test_homes_limit_inclusive(self):
        assert validate_request(build_rfp_request("X", "Fairfax", 10_000)) == []

    def test_no_services(self):
        request = build_rfp_request(
            "X", "Fairfax", 100,
            services={"trash": {"required": False}, "recycling": {"required": False}},
        )
        assert _codes(request) == [("services", "NO_SERVICES")]

    @pytest.mark.parametrize("years", [0, 11])
    def test_contract_length_range(self, years):
        assert _codes(build_rfp_request("X", "Fairfax", 100, contract_length=years)) == [
            ("contractLength", "INVALID_RANGE"),
        ]

    @pytest.mark.parametrize("years", [1, 10])
    def test_contract_length_bounds_inclusive(self, years):
        assert validate_request(build_rfp_request("X", "Fairfax", 100, contract_length=years)) == []

    def test_all_issues_reported_together(self):
        request = build_rfp_request(
            "", "Fairfax", 0,
            contract_length=12,
            services={"trash": {"required": False}, "recycling": {"required": False}},
        )
        assert _codes(request) == [
            ("communityName", "REQUIRED_FIELD"),
            ("homes", "INVALID_VALUE"),
            ("services", "NO_SERVICES"),
            ("contractLength", "INVALID_RANGE"),
        ]

    def test_issue_serialises_to_wire(self):
        issue = validate_request(build_rfp_request("X", "Fairfax", 0))[0]
        assert issue.to_wire() == {
            "field": "homes",
            "message": "Number of homes must be greater than 0",
            "code": "INVALID_VALUE",
        }

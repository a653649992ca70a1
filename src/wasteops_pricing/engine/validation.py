"""Business-rule checks on a pricing request.

All checks run; the caller gets every issue at once.
"""

from __future__ import annotations

from wasteops_pricing.config.service_request import PricingRequest
from wasteops_pricing.models.results import ValidationIssue

MAX_HOMES = 10_000
MIN_CONTRACT_YEARS = 1
MAX_CONTRACT_YEARS = 10


def validate_request(request: PricingRequest) -> list[ValidationIssue]:
    """Return the list of issues; empty means the request is valid."""
    issues: list[ValidationIssue] = []

    if not request.community_name or not request.community_name.strip():
        issues.append(ValidationIssue(
            field="communityName", message="Community name is required", code="REQUIRED_FIELD",
        ))

    if request.homes < 1:
        issues.append(ValidationIssue(
            field="homes", message="Number of homes must be greater than 0", code="INVALID_VALUE",
        ))
    if request.homes > MAX_HOMES:
        issues.append(ValidationIssue(
            field="homes",
            message=f"Number of homes exceeds maximum limit ({MAX_HOMES:,})",
            code="EXCEEDS_LIMIT",
        ))

    if request.services.required_count == 0:
        issues.append(ValidationIssue(
            field="services", message="At least one service must be required", code="NO_SERVICES",
        ))

    if not MIN_CONTRACT_YEARS <= request.contract_length <= MAX_CONTRACT_YEARS:
        issues.append(ValidationIssue(
            field="contractLength",
            message=f"Contract length must be between {MIN_CONTRACT_YEARS} and {MAX_CONTRACT_YEARS} years",
            code="INVALID_RANGE",
        ))

    return issues

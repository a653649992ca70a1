"""Narrative generator: plain-text summaries around computed results.

Nothing here calculates. These are what the team's chat notifier posts
for a new quote or serviceability check.
"""

from __future__ import annotations

from wasteops_pricing.models.results import PricingResponse, ServiceabilityResponse


def generate_pricing_narrative(response: PricingResponse, community_name: str = "") -> str:
    """Plain-text quote summary: price, economics, decision, risks."""
    p = response.pricing
    ops = response.operations
    rec = response.recommendation
    val = response.validation

    sections: list[str] = []
    title = f"PRICING QUOTE: {community_name}" if community_name else "PRICING QUOTE"
    sections.append("=" * 60)
    sections.append(title)
    sections.append("=" * 60)
    sections.append(
        f"Price per unit: ${p.price_per_unit:.2f}/month\n"
        f"Base price: ${p.base_price:.2f} "
        f"(+${p.premiums.total:.2f} premiums, -${p.discounts.total:.2f} discounts)\n"
        f"Monthly revenue: ${p.total_monthly_revenue:,.2f}\n"
        f"Monthly cost: ${ops.operational_costs.total_cost_per_month:,.2f}\n"
        f"Monthly profit: ${p.total_monthly_profit:,.2f} ({p.margin_percent * 100:.1f}% margin)"
    )

    sections.append("")
    sections.append("=" * 60)
    sections.append("DECISION")
    sections.append("=" * 60)
    sections.append(
        f"Recommendation: {rec.recommendation_type.upper()} "
        f"(confidence: {rec.confidence}, strategic fit: {rec.strategic_fit})\n"
        f"Serviceability score: {rec.serviceability_score}/100\n"
        f"Market: {val.validation_message}"
    )
    for line in rec.reasoning:
        sections.append(f"  - {line}")

    if rec.risk_flags or rec.conditions:
        sections.append("")
        sections.append("=" * 60)
        sections.append("RISKS & CONDITIONS")
        sections.append("=" * 60)
        for flag in rec.risk_flags:
            sections.append(f"  {flag}")
        for condition in rec.conditions:
            sections.append(f"  * {condition}")

    return "\n".join(sections)


def generate_serviceability_narrative(response: ServiceabilityResponse) -> str:
    """Plain-text serviceability summary for a single address."""
    b = response.breakdown
    sections = [
        "=" * 60,
        f"SERVICEABILITY: {response.address}",
        "=" * 60,
        f"Customer type: {response.customer_type}\n"
        f"Recommendation: {response.recommendation}\n"
        f"Suggested price: ${response.suggested_price:.2f}/month\n"
        f"Nearest customer: {response.nearest_customer_distance} "
        f"({response.drive_time_minutes} min drive)\n"
        f"Reason: {response.reason}",
        "",
        "Scores:",
        f"  Proximity            {b.proximity_score.value:3d}  ({b.proximity_score.status})",
        f"  Route integration    {b.route_integration.value:3d}  ({b.route_integration.status})",
        f"  Customer density     {b.customer_density.value:3d}  ({b.customer_density.status})",
        f"  Profitability        {b.estimated_profitability.value:3d}  ({b.estimated_profitability.status})",
    ]
    return "\n".join(sections)

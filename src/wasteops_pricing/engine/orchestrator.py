"""Pricing orchestrator: one request in, one complete ``PricingResponse`` out.

Sequence (later steps read earlier outputs):
  validate → operational analysis → pricing breakdown
  → recommendation → market validation → metadata

Validation failures raise before any calculation. Any other exception is
re-raised as ``CalculationError`` so callers see a stable error code.
"""

from __future__ import annotations

import time
import uuid
from datetime import datetime, timezone

from wasteops_pricing import __version__
from wasteops_pricing.config.pricing import PricingConfig
from wasteops_pricing.config.service_request import PricingRequest
from wasteops_pricing.engine.market import compare_to_market
from wasteops_pricing.engine.operations import compute_operational_analysis
from wasteops_pricing.engine.pricing import compute_pricing_breakdown
from wasteops_pricing.engine.reasoning import (
    describe_competitive_advantages,
    describe_market_risks,
    format_conditions,
    format_reasoning,
    format_risk_flags,
    format_strategic_summary,
    format_validation_message,
)
from wasteops_pricing.engine.recommendation import build_decision
from wasteops_pricing.engine.validation import validate_request
from wasteops_pricing.errors import CalculationError, PricingServiceError, PricingValidationError
from wasteops_pricing.logging_config import get_logger
from wasteops_pricing.models.results import (
    MarketValidation,
    OperationalAnalysis,
    PricingBreakdown,
    PricingMetadata,
    PricingRecommendation,
    PricingResponse,
)

logger = get_logger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Public entry point
# ═══════════════════════════════════════════════════════════════════════════

def calculate_pricing(request: PricingRequest, config: PricingConfig) -> PricingResponse:
    """Run the full pricing calculation for ``request`` under ``config``."""
    start = time.perf_counter()
    request_id = f"pricing-{uuid.uuid4().hex[:12]}"

    issues = validate_request(request)
    if issues:
        raise PricingValidationError([issue.to_wire() for issue in issues])

    try:
        operations = compute_operational_analysis(request, config)
        pricing = compute_pricing_breakdown(request, operations, config)
        recommendation = _build_recommendation(request, pricing, operations)
        validation = _build_market_validation(request, pricing, config)
    except PricingServiceError:
        raise
    except Exception as exc:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.exception("pricing calculation failed", extra={"request_id": request_id})
        raise CalculationError(
            details={"original_error": repr(exc), "processing_time_ms": round(elapsed_ms, 3)},
        ) from exc

    elapsed_ms = (time.perf_counter() - start) * 1000
    metadata = PricingMetadata(
        request_id=request_id,
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        config=config,
        processing_time_ms=elapsed_ms,
    )

    logger.info(
        "pricing calculated",
        extra={
            "request_id": request_id,
            "community": request.community_name,
            "homes": request.homes,
            "price_per_unit": round(pricing.price_per_unit, 2),
            "margin_percent": round(pricing.margin_percent * 100, 1),
            "recommendation": recommendation.recommendation_type,
            "processing_time_ms": round(elapsed_ms, 3),
        },
    )

    return PricingResponse(
        pricing=pricing,
        operations=operations,
        recommendation=recommendation,
        validation=validation,
        metadata=metadata,
    )


# ═══════════════════════════════════════════════════════════════════════════
# Assembly helpers
# ═══════════════════════════════════════════════════════════════════════════

def _build_recommendation(
    request: PricingRequest,
    pricing: PricingBreakdown,
    operations: OperationalAnalysis,
) -> PricingRecommendation:
    decision = build_decision(request, pricing, operations)
    return PricingRecommendation(
        should_bid=decision.should_bid,
        confidence=decision.confidence,
        recommendation_type=decision.recommendation_type,
        serviceability_score=decision.serviceability_score,
        strategic_fit=decision.strategic_fit,
        reasoning=format_reasoning(request, pricing, operations),
        conditions=format_conditions(decision.conditions),
        risk_flags=format_risk_flags(decision.risk_flags, operations),
        strategic_summary=format_strategic_summary(request, pricing, operations),
    )


def _build_market_validation(
    request: PricingRequest,
    pricing: PricingBreakdown,
    config: PricingConfig,
) -> MarketValidation:
    market = compare_to_market(request.unit_type, pricing.price_per_unit, config)
    return MarketValidation(
        benchmark_price=market.benchmark_price,
        variance_percent=market.variance_percent,
        is_within_benchmark=market.is_within_benchmark,
        market_position=market.market_position,
        competitive_advantages=describe_competitive_advantages(request, pricing),
        market_risks=describe_market_risks(request, pricing, market.variance_percent),
        validation_status=market.validation_status,
        validation_message=format_validation_message(
            market.is_within_benchmark, market.variance_percent, market.market_position,
        ),
    )

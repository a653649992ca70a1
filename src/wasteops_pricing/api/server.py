"""FastAPI server for the pricing and serviceability engine.

Run with:
    uvicorn wasteops_pricing.api.server:app --reload --port 8000

Or:
    python -m wasteops_pricing.api.server

Endpoints:
    GET  /                          API info
    GET  /health                    liveness
    POST /serviceability            score a candidate address
    POST /serviceability/narrative  same, as a plain-text summary
    POST /pricing                   price a community request
    POST /pricing/narrative         same, as a plain-text summary
    GET  /pricing                   current pricing config
    PUT  /pricing                   shallow-merge config overrides (admin)
    POST /pricing/reset             restore default config (admin)
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from wasteops_pricing import __version__
from wasteops_pricing.api.narrative import generate_pricing_narrative, generate_serviceability_narrative
from wasteops_pricing.config.pricing import PricingConfig
from wasteops_pricing.config.service_request import PricingRequest
from wasteops_pricing.config.serviceability import ServiceabilityRequest
from wasteops_pricing.config.settings import get_settings
from wasteops_pricing.config.store import PricingConfigStore, load_pricing_config
from wasteops_pricing.engine.orchestrator import calculate_pricing
from wasteops_pricing.engine.serviceability import check_serviceability
from wasteops_pricing.errors import PricingServiceError, PricingValidationError
from wasteops_pricing.logging_config import get_logger
from wasteops_pricing.models.customers import CustomerCache
from wasteops_pricing.models.results import PricingResponse, ServiceabilityResponse

logger = get_logger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

app = FastAPI(
    title="Waste Operations Pricing API",
    version=__version__,
    description=(
        "Serviceability scoring for new single-family addresses and "
        "bid pricing for HOA / community RFPs."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


def _initial_config() -> PricingConfig:
    settings = get_settings()
    if settings.pricing_config_path is not None:
        logger.info("loading pricing config", extra={"path": str(settings.pricing_config_path)})
        return load_pricing_config(settings.pricing_config_path)
    return PricingConfig()


config_store = PricingConfigStore(_initial_config())
customer_cache = CustomerCache(get_settings().customers_data_path)


# ═══════════════════════════════════════════════════════════════════════════
# Error handling
# ═══════════════════════════════════════════════════════════════════════════

@app.exception_handler(PricingServiceError)
def handle_service_error(request: Request, exc: PricingServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request failed", extra={"path": request.url.path, "code": exc.code, "error": exc.message})
    else:
        logger.info("request rejected", extra={"path": request.url.path, "code": exc.code})
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


@app.exception_handler(RequestValidationError)
def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    issues = [
        {
            "field": ".".join(str(p) for p in err["loc"] if p != "body"),
            "message": err["msg"],
            "code": "REQUIRED_FIELD" if err["type"] == "missing" else "INVALID_FORMAT",
        }
        for err in exc.errors()
    ]
    error = PricingValidationError(issues)
    return handle_service_error(request, error)


@app.exception_handler(Exception)
def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error", extra={"path": request.url.path})
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Internal server error", "code": "INTERNAL_ERROR"},
    )


# ═══════════════════════════════════════════════════════════════════════════
# Request models
# ═══════════════════════════════════════════════════════════════════════════

class ConfigUpdateRequest(BaseModel):
    """Body for PUT /pricing. ``config`` holds a partial PricingConfig."""
    config: dict[str, Any] | None = None


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _run_serviceability(req: ServiceabilityRequest) -> ServiceabilityResponse:
    # HOA approval never needs the customer snapshot
    customers = [] if req.customer_type == "HOA" else customer_cache.get()
    return check_serviceability(req, customers)


def _legacy_fields(response: PricingResponse) -> dict[str, Any]:
    """Flat fields still read by the older quote screen."""
    return {
        "suggestedPricePerHome": response.pricing.price_per_unit,
        "estimatedCostPerMonth": response.operations.operational_costs.total_cost_per_month,
        "projectedGrossMargin": response.pricing.margin_percent,
        "recommendation": response.recommendation.recommendation_type,
        "serviceabilityScore": response.recommendation.serviceability_score,
        "riskFlags": response.recommendation.risk_flags,
        "reasoning": response.recommendation.reasoning,
        "strategicSummary": response.recommendation.strategic_summary,
    }


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/")
def root():
    return {
        "name": "Waste Operations Pricing API",
        "version": __version__,
        "docs": "GET /docs (interactive Swagger UI)",
        "endpoints": ["/serviceability", "/pricing"],
    }


@app.post("/serviceability")
def serviceability(req: ServiceabilityRequest):
    """Score a candidate address against the existing customer base.

    HOA requests are approved at a fixed price without scoring.
    """
    result = _run_serviceability(req)
    logger.info(
        "serviceability checked",
        extra={
            "customer_type": req.customer_type,
            "recommendation": result.recommendation,
            "suggested_price": result.suggested_price,
        },
    )
    return {"success": True, "data": result.to_wire()}


@app.post("/serviceability/narrative")
def serviceability_narrative(req: ServiceabilityRequest):
    """Serviceability check as a plain-text summary."""
    result = _run_serviceability(req)
    return {
        "narrative": generate_serviceability_narrative(result),
        "headlineMetrics": {
            "recommendation": result.recommendation,
            "suggestedPrice": result.suggested_price,
            "driveTimeMinutes": result.drive_time_minutes,
        },
    }


@app.post("/pricing")
def pricing(req: PricingRequest):
    """Price a community request under the current config."""
    logger.info("pricing request", extra={"community": req.community_name, "homes": req.homes})
    response = calculate_pricing(req, config_store.get())
    return {"success": True, "data": response.to_wire(), "legacy": _legacy_fields(response)}


@app.post("/pricing/narrative")
def pricing_narrative(req: PricingRequest):
    """Pricing calculation as a plain-text summary."""
    response = calculate_pricing(req, config_store.get())
    return {
        "narrative": generate_pricing_narrative(response, req.community_name),
        "headlineMetrics": {
            "pricePerUnit": round(response.pricing.price_per_unit, 2),
            "marginPercent": round(response.pricing.margin_percent * 100, 1),
            "recommendation": response.recommendation.recommendation_type,
            "serviceabilityScore": response.recommendation.serviceability_score,
        },
    }


@app.get("/pricing")
def get_pricing_config():
    """Current pricing configuration."""
    return {
        "success": True,
        "config": config_store.get().to_wire(),
        "info": {
            "version": __version__,
            "description": "Consolidated Pricing Service API",
            "features": [
                "Unit-based pricing with market benchmarks",
                "Operational cost analysis",
                "Fleet utilization calculations",
                "Strategic recommendations",
                "Market validation",
            ],
        },
    }


@app.put("/pricing")
def update_pricing_config(req: ConfigUpdateRequest):
    """Shallow-merge overrides into the live config (admin only by convention)."""
    if not req.config:
        raise PricingValidationError(
            [{"field": "config", "message": "Missing config in request body", "code": "REQUIRED_FIELD"}],
            message="Missing config in request body",
        )
    new_config = config_store.update(req.config)
    logger.info("pricing config updated", extra={"fields": sorted(req.config)})
    return {
        "success": True,
        "message": "Pricing service configuration updated",
        "newConfig": new_config.to_wire(),
    }


@app.post("/pricing/reset")
def reset_pricing_config():
    """Restore the startup defaults."""
    config = config_store.reset()
    logger.info("pricing config reset")
    return {
        "success": True,
        "message": "Pricing configuration reset to defaults",
        "config": config.to_wire(),
    }


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "wasteops_pricing.api.server:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )


if __name__ == "__main__":
    main()

"""Structured errors shared by the engine and the API layer.

Every error carries a stable ``code`` and renders to the JSON body
``{"success": false, "error": ..., "code": ..., "details": ...}``.
"""

from __future__ import annotations

from typing import Any


class PricingServiceError(Exception):
    """Base class for all engine errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str,
        details: Any = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_body(self) -> dict[str, Any]:
        """Convert the error into the API error body."""
        body: dict[str, Any] = {
            "success": False,
            "error": self.message,
            "code": self.code,
        }
        if self.details is not None:
            body["details"] = self.details
        return body


class PricingValidationError(PricingServiceError):
    """Raised when a request fails field-level validation.

    ``details`` holds the full list of issues, never just the first one.
    """

    status_code = 400

    def __init__(self, issues: list[dict[str, Any]], message: str = "Request validation failed"):
        super().__init__(message, "VALIDATION_ERROR", details=issues)
        self.issues = issues


class CalculationError(PricingServiceError):
    """Raised when an unexpected exception escapes a calculation."""

    status_code = 500

    def __init__(self, message: str = "Pricing calculation failed", details: Any = None):
        super().__init__(message, "CALCULATION_ERROR", details=details)


class ConfigurationError(PricingServiceError):
    """Raised when a required file or setting is missing or unreadable."""

    status_code = 500

    def __init__(self, message: str, details: Any = None, not_found: bool = False):
        super().__init__(
            message,
            "CONFIGURATION_ERROR",
            details=details,
            status_code=404 if not_found else None,
        )

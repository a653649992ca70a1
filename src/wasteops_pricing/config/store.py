"""Holder for the live pricing configuration.

Calculations never read this directly: the API takes a snapshot with
``get()`` and passes it into the engine. Administrative updates are a
read-modify-write under a lock, so two concurrent updates cannot lose
each other's fields. A request running during an update sees either the
old or the new config, never a mix.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from wasteops_pricing.config.pricing import PricingConfig
from wasteops_pricing.errors import ConfigurationError, PricingValidationError


def load_pricing_config(path: Path) -> PricingConfig:
    """Load a ``PricingConfig`` from a YAML file of (partial) overrides."""
    if not path.exists():
        raise ConfigurationError(f"Pricing config file not found: {path}", not_found=True)
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Pricing config file must contain a mapping: {path}")
    try:
        return PricingConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid pricing config in {path}",
            details=_issues_from_pydantic(exc),
        ) from exc


def _issues_from_pydantic(exc: ValidationError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(p) for p in err["loc"]),
            "message": err["msg"],
            "code": "INVALID_VALUE",
        }
        for err in exc.errors()
    ]


class PricingConfigStore:
    """Lock-guarded holder for the current ``PricingConfig``."""

    def __init__(self, defaults: PricingConfig | None = None):
        self._defaults = defaults.model_copy(deep=True) if defaults else PricingConfig()
        self._config = self._defaults.model_copy(deep=True)
        self._lock = threading.Lock()

    def get(self) -> PricingConfig:
        """Snapshot of the current config (safe to hand to a calculation)."""
        with self._lock:
            return self._config.model_copy(deep=True)

    def update(self, partial: dict[str, Any]) -> PricingConfig:
        """Shallow-merge ``partial`` over the current config.

        Top-level keys replace the current value wholesale; a nested
        section given partially is filled from the model defaults, not
        from the current section. Keys may be snake_case or camelCase.
        Raises ``PricingValidationError`` if the merged config is invalid;
        the current config is left unchanged in that case.
        """
        with self._lock:
            merged = self._config.model_dump()
            for key, value in partial.items():
                merged[_field_name(key)] = value
            try:
                new_config = PricingConfig.model_validate(merged)
            except ValidationError as exc:
                raise PricingValidationError(
                    _issues_from_pydantic(exc), message="Invalid pricing configuration",
                ) from exc
            self._config = new_config
            return new_config.model_copy(deep=True)

    def reset(self) -> PricingConfig:
        """Restore the startup defaults."""
        with self._lock:
            self._config = self._defaults.model_copy(deep=True)
            return self._config.model_copy(deep=True)

    @property
    def defaults(self) -> PricingConfig:
        return self._defaults.model_copy(deep=True)


def _field_name(key: str) -> str:
    """Map a camelCase wire key to the Python field name."""
    for name, info in PricingConfig.model_fields.items():
        if key == name or key == info.alias:
            return name
    return key

"""Existing customer snapshot: record model, normalisation, cached loader.

The snapshot is a flat JSON array exported from the operations sheet.
Keys are human-readable column names (``"HOA Name"``, ``"Full Address"``,
...) and numbers often arrive as strings (``"$1,250.00"``, ``"38.85"``).
"""

from __future__ import annotations

import json
import math
import re
import threading
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from wasteops_pricing.errors import ConfigurationError
from wasteops_pricing.logging_config import get_logger

logger = get_logger(__name__)

_ADDRESS_TAIL = re.compile(r"^(.+?)\s+([A-Z]{2})\s+(\d{5}(?:-\d{4})?)$")


# ═══════════════════════════════════════════════════════════════════════════
# Normalisation helpers
# ═══════════════════════════════════════════════════════════════════════════

def parse_monetary_value(value: Any) -> float:
    """``"$1,234.50"`` -> 1234.5; empty or unparsable -> 0."""
    if isinstance(value, (int, float)):
        return float(value)
    if not value or not isinstance(value, str):
        return 0.0
    try:
        return float(value.replace("$", "").replace(",", ""))
    except ValueError:
        return 0.0


def parse_address(full_address: str) -> tuple[str | None, str | None, str | None]:
    """Split ``"... Fairfax VA 22030"`` into (city, state, zip).

    The city is the last word before the state code. No match -> all None.
    """
    match = _ADDRESS_TAIL.match(full_address.strip()) if full_address else None
    if not match:
        return None, None, None
    return match.group(1).split(" ")[-1], match.group(2), match.group(3)


def map_customer_type(value: str | None) -> str:
    upper = (value or "").upper()
    if upper in ("HOA", "SUBSCRIPTION", "COMMERCIAL"):
        return upper
    return "HOA"


def map_unit_type(value: str | None) -> str:
    lower = (value or "").lower()
    if lower in ("townhomes", "townhome"):
        return "TOWNHOMES"
    if lower in ("single family", "single-family"):
        return "SINGLE_FAMILY_HOMES"
    if lower in ("condo", "condos"):
        return "CONDOS"
    if lower in ("apartment", "apartments"):
        return "MIXED_RESIDENTIAL"
    if lower in ("commercial", "gas station"):
        return "COMMERCIAL"
    return "SINGLE_FAMILY_HOMES"


def map_service_status(value: str | None) -> str:
    lower = (value or "").lower()
    if lower in ("serviced", "active"):
        return "SERVICED"
    if lower == "pending":
        return "PENDING"
    if lower in ("inactive", "cancelled"):
        return "CANCELLED"
    return "SERVICED"


def _to_float_or_none(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def _to_int_or_none(value: Any) -> int | None:
    parsed = _to_float_or_none(value)
    return int(parsed) if parsed is not None else None


# ═══════════════════════════════════════════════════════════════════════════
# Record model
# ═══════════════════════════════════════════════════════════════════════════

class CustomerRecord(BaseModel):
    """One existing customer, as exported from the operations sheet."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    hoa_name: str = Field(default="Unknown", alias="HOA Name")
    full_address: str = Field(default="", alias="Full Address")
    latitude: float | None = None
    longitude: float | None = None
    type: str = Field(default="HOA", alias="Type")
    monthly_revenue: float = Field(default=0.0, alias="Monthly Revenue")
    number_of_units: int | None = Field(default=None, alias="Number of Units")
    avg_completion_minutes: float = Field(default=0.0, alias="Average Completion Time in Minutes")
    service_status: str = Field(default="SERVICED", alias="Service Status")
    unit_type: str = Field(default="SINGLE_FAMILY_HOMES", alias="Unit Type")

    @field_validator("hoa_name", mode="before")
    @classmethod
    def _name(cls, v: Any) -> str:
        return v or "Unknown"

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, v: Any) -> str:
        return v or "HOA"

    @field_validator("full_address", mode="before")
    @classmethod
    def _address(cls, v: Any) -> str:
        return v or ""

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coordinate(cls, v: Any) -> float | None:
        return _to_float_or_none(v)

    @field_validator("monthly_revenue", mode="before")
    @classmethod
    def _revenue(cls, v: Any) -> float:
        return parse_monetary_value(v)

    @field_validator("number_of_units", mode="before")
    @classmethod
    def _units(cls, v: Any) -> int | None:
        return _to_int_or_none(v)

    @field_validator("avg_completion_minutes", mode="before")
    @classmethod
    def _completion(cls, v: Any) -> float:
        return _to_float_or_none(v) or 0.0

    @field_validator("service_status", mode="before")
    @classmethod
    def _status(cls, v: Any) -> str:
        return map_service_status(v)

    @field_validator("unit_type", mode="before")
    @classmethod
    def _unit_type(cls, v: Any) -> str:
        return map_unit_type(v)

    @property
    def customer_type(self) -> str:
        return map_customer_type(self.type)

    @property
    def is_active(self) -> bool:
        return self.service_status == "SERVICED"

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None

    @property
    def city_state_zip(self) -> tuple[str | None, str | None, str | None]:
        return parse_address(self.full_address)


# ═══════════════════════════════════════════════════════════════════════════
# Loading
# ═══════════════════════════════════════════════════════════════════════════

def load_customers(path: Path) -> list[CustomerRecord]:
    """Read the customer snapshot from ``path``.

    Records without parsable coordinates are kept (they still count for
    revenue reporting) but logged, since the serviceability check skips
    them.
    """
    if not path.exists():
        raise ConfigurationError(
            f"Customer data file not found: {path}",
            details={"path": str(path)},
            not_found=True,
        )
    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Customer data file is not valid JSON: {path}") from exc
    if not isinstance(raw, list):
        raise ConfigurationError(f"Customer data file must contain a JSON array: {path}")

    try:
        customers = [CustomerRecord.model_validate(item) for item in raw]
    except ValidationError as exc:
        raise ConfigurationError(f"Malformed customer record in {path}", details=str(exc)) from exc

    missing = sum(1 for c in customers if not c.has_coordinates)
    if missing:
        logger.warning("customers without coordinates", extra={"count": missing, "path": str(path)})
    active = sum(1 for c in customers if c.is_active)
    logger.info(
        "loaded customers",
        extra={"count": len(customers), "active": active, "path": str(path)},
    )
    return customers


class CustomerCache:
    """Read-through cache of the customer snapshot.

    Re-reads the file when its modification time changes, so an updated
    export is picked up without a restart.
    """

    def __init__(self, path: Path):
        self.path = path
        self._lock = threading.Lock()
        self._customers: list[CustomerRecord] | None = None
        self._mtime: float | None = None

    def get(self) -> list[CustomerRecord]:
        with self._lock:
            try:
                mtime = self.path.stat().st_mtime
            except FileNotFoundError:
                mtime = None
            if self._customers is None or mtime != self._mtime:
                self._customers = load_customers(self.path)
                self._mtime = mtime
            return self._customers

    def clear(self) -> None:
        with self._lock:
            self._customers = None
            self._mtime = None

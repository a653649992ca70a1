"""Great-circle distance and drive-time estimates.

Distances are in statute miles. No input validation: NaN coordinates
propagate to NaN distances.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from wasteops_pricing.models.customers import CustomerRecord

EARTH_RADIUS_MILES = 3959.0

# Average speed between stops by route density (mph). Denser routes mean
# more stops and slower travel.
DENSITY_SPEED_MPH: dict[str, float] = {
    "High": 20.0,
    "Medium": 25.0,
    "Low": 30.0,
}

BASE_STOP_MINUTES = 2.0


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves toward +infinity (0.5 -> 1, 2.5 -> 3, -2.5 -> -2).

    Python's ``round`` rounds halves to even, which would shift prices and
    drive times at exact .5 boundaries. NaN and infinities come back
    unchanged.
    """
    if not math.isfinite(value):
        return value
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def haversine_miles(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points (miles)."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def distances_to_customers(
    lat: float,
    lng: float,
    customers: Sequence[CustomerRecord],
) -> np.ndarray:
    """Vectorised Haversine from one point to every customer.

    Customers without coordinates get ``inf`` so they sort last and never
    fall inside a radius.
    """
    if not customers:
        return np.empty(0, dtype=float)

    lats = np.array([c.latitude if c.has_coordinates else np.nan for c in customers], dtype=float)
    lngs = np.array([c.longitude if c.has_coordinates else np.nan for c in customers], dtype=float)

    d_lat = np.radians(lats - lat)
    d_lng = np.radians(lngs - lng)
    a = (
        np.sin(d_lat / 2) ** 2
        + np.cos(math.radians(lat)) * np.cos(np.radians(lats)) * np.sin(d_lng / 2) ** 2
    )
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    distances = EARTH_RADIUS_MILES * c

    missing = np.isnan(lats) | np.isnan(lngs)
    distances[missing] = np.inf
    return distances


def estimate_drive_time(distance_miles: float, route_density: str) -> int | float:
    """Minutes to reach a stop ``distance_miles`` away.

    = distance / speed × 60 + 2 minutes for stops and turns, rounded to
    the nearest whole minute. Never less than 2 for distance >= 0.
    A NaN or infinite distance gives the same non-finite float back.
    """
    speed = DENSITY_SPEED_MPH.get(route_density, DENSITY_SPEED_MPH["Medium"])
    drive_minutes = (distance_miles / speed) * 60
    total = round_half_up(drive_minutes + BASE_STOP_MINUTES)
    return int(total) if math.isfinite(total) else total

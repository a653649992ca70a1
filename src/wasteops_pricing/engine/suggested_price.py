"""Suggested monthly price for a single-family serviceability check.

Adjustments are additive and applied in a fixed order; changing the
order changes the result.
"""

from __future__ import annotations

PRICE_FLOOR = 24.0
EXTRA_CART_PRICE = 8.0


def calculate_suggested_price(
    route_density: str,
    customers_within_1_mile: int,
    drive_time: float,
    number_of_carts: int = 1,
) -> float:
    """Price from route efficiency, local density, drive time, and carts."""
    # 1. Base by route efficiency
    if route_density == "High" and drive_time <= 5:
        price = 26.0
    elif route_density == "Medium" and drive_time <= 8:
        price = 30.0
    else:
        price = 36.0

    # 2. Density discount / premium
    if customers_within_1_mile >= 10:
        price -= 3
    elif customers_within_1_mile >= 5:
        price -= 1
    elif customers_within_1_mile < 2:
        price += 5

    # 3. Drive-time penalty / bonus
    if drive_time > 15:
        price += 6
    elif drive_time <= 3:
        price -= 2

    # 4. Extra carts
    if number_of_carts > 1:
        price += (number_of_carts - 1) * EXTRA_CART_PRICE

    return max(price, PRICE_FLOOR)

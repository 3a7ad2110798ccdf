"""
Distance unit conversions.

Strava reports distance in meters; everything user-facing is in miles.
Rounding is half-up on the exact decimal product, so stored values match
what PostgreSQL's round(numeric, 2) produces.
"""

from decimal import Decimal, ROUND_HALF_UP

METERS_TO_MILES = Decimal("0.000621371")

_CENTS = Decimal("0.01")


def meters_to_miles(meters: float | int | None) -> float:
    """
    Convert meters to miles, rounded to 2 decimal places.

    Args:
        meters: Distance in meters (None is treated as 0)

    Returns:
        Distance in miles (e.g., 10000 -> 6.21)
    """
    if not meters:
        return 0.0
    miles = Decimal(str(meters)) * METERS_TO_MILES
    return float(miles.quantize(_CENTS, rounding=ROUND_HALF_UP))


def round_miles(miles: float | None, places: int = 2) -> float:
    """Round an aggregated mileage value for storage or display."""
    if not miles:
        return 0.0
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(miles)).quantize(quantum, rounding=ROUND_HALF_UP))

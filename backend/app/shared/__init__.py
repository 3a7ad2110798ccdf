"""
Shared utilities (NOT business logic).

Usage:
    from app.shared import is_in_region, meters_to_miles
    from app.shared.dates import utcnow
"""
from .geo import (
    BoundingBox,
    DC_METRO_BOX,
    is_in_region,
    classify_start,
)
from .units import (
    METERS_TO_MILES,
    meters_to_miles,
    round_miles,
)
from .constants import (
    StravaActivityType,
    MILEAGE_ACTIVITY_TYPES,
    counts_toward_mileage,
)
from .dates import utcnow
from .repository import BaseRepository

__all__ = [
    # geo
    "BoundingBox",
    "DC_METRO_BOX",
    "is_in_region",
    "classify_start",
    # units
    "METERS_TO_MILES",
    "meters_to_miles",
    "round_miles",
    # constants
    "StravaActivityType",
    "MILEAGE_ACTIVITY_TYPES",
    "counts_toward_mileage",
    # dates
    "utcnow",
    # repository
    "BaseRepository",
]

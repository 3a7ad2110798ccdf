"""
Geographic utility functions.

This is the SINGLE SOURCE OF TRUTH for the eligible-region check.
DO NOT duplicate these functions elsewhere.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned lat/lon box, edges inclusive."""

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def contains(self, lat: float, lon: float) -> bool:
        return (
            self.min_lat <= lat <= self.max_lat
            and self.min_lon <= lon <= self.max_lon
        )


# DC metro: DC, Arlington, Alexandria, Bethesda, Silver Spring
DC_METRO_BOX = BoundingBox(
    min_lat=38.8,
    max_lat=39.2,
    min_lon=-77.5,
    max_lon=-76.9,
)


def is_in_region(lat: float, lon: float, box: BoundingBox = DC_METRO_BOX) -> bool:
    """
    Check whether a point falls inside the eligible region.

    Args:
        lat: Latitude (degrees)
        lon: Longitude (degrees)
        box: Region to test against (default: DC metro)

    Returns:
        True if the point is inside the box, edges included
    """
    return box.contains(lat, lon)


def classify_start(
    lat: Optional[float],
    lon: Optional[float],
    box: BoundingBox = DC_METRO_BOX
) -> bool:
    """
    In-region flag for an activity start point.

    Missing coordinates are never in region.
    """
    if lat is None or lon is None:
        return False
    return is_in_region(lat, lon, box)

"""
Access tiers.

The tier is a pure function of current-month in-region miles.
Thresholds are fixed here; drops carry their own per-drop thresholds.
"""

from enum import Enum
from typing import Optional, Tuple


class AccessTier(str, Enum):
    """Mileage tier, ordered from lowest to highest."""

    NONE = "none"
    BASIC = "basic"
    PREMIUM = "premium"
    EXCLUSIVE = "exclusive"

    @property
    def rank(self) -> int:
        return _ORDER.index(self)

    def __ge__(self, other):
        if not isinstance(other, AccessTier):
            return NotImplemented
        return self.rank >= other.rank

    def __gt__(self, other):
        if not isinstance(other, AccessTier):
            return NotImplemented
        return self.rank > other.rank

    def __le__(self, other):
        if not isinstance(other, AccessTier):
            return NotImplemented
        return self.rank <= other.rank

    def __lt__(self, other):
        if not isinstance(other, AccessTier):
            return NotImplemented
        return self.rank < other.rank


_ORDER = [AccessTier.NONE, AccessTier.BASIC, AccessTier.PREMIUM, AccessTier.EXCLUSIVE]

# Minimum current-month miles per tier
TIER_THRESHOLDS = {
    AccessTier.BASIC: 50.0,
    AccessTier.PREMIUM: 100.0,
    AccessTier.EXCLUSIVE: 150.0,
}


def tier_for_miles(miles: float) -> AccessTier:
    """
    Map current-month miles to an access tier.

    Examples:
        149.99 -> premium
        150.0  -> exclusive
        49.99  -> none
    """
    if miles >= TIER_THRESHOLDS[AccessTier.EXCLUSIVE]:
        return AccessTier.EXCLUSIVE
    if miles >= TIER_THRESHOLDS[AccessTier.PREMIUM]:
        return AccessTier.PREMIUM
    if miles >= TIER_THRESHOLDS[AccessTier.BASIC]:
        return AccessTier.BASIC
    return AccessTier.NONE


def next_tier(miles: float) -> Optional[Tuple[AccessTier, float]]:
    """
    Next tier above the one `miles` earns, and the miles still needed.

    Returns:
        (tier, miles_remaining), or None when already exclusive
    """
    current = tier_for_miles(miles)
    if current is AccessTier.EXCLUSIVE:
        return None
    upcoming = _ORDER[current.rank + 1]
    remaining = round(TIER_THRESHOLDS[upcoming] - miles, 2)
    return upcoming, remaining

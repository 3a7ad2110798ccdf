"""
Unified constants for activity types.

This module provides a single source of truth for which Strava
activity types count toward mileage.
"""

from enum import Enum


class StravaActivityType(str, Enum):
    """
    Activity types from Strava API.

    These are Strava's naming conventions, not ours.
    Matching is case-sensitive.
    """
    RUN = "Run"
    TRAIL_RUN = "TrailRun"
    VIRTUAL_RUN = "VirtualRun"


# Strava types whose distance counts toward mileage
MILEAGE_ACTIVITY_TYPES: frozenset[str] = frozenset(
    t.value for t in StravaActivityType
)


def counts_toward_mileage(activity: dict) -> bool:
    """
    True if either `type` or `sport_type` is a running type.

    Args:
        activity: Activity payload from Strava API
    """
    return (
        activity.get("type") in MILEAGE_ACTIVITY_TYPES
        or activity.get("sport_type") in MILEAGE_ACTIVITY_TYPES
    )

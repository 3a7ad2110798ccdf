"""
Activity payload mapping.

Turns Strava's list-activities objects into Activity row values.
"""

import logging
from typing import Optional

from app.shared.constants import counts_toward_mileage
from app.shared.dates import parse_strava_date, utcnow
from app.shared.geo import classify_start
from app.shared.units import meters_to_miles

logger = logging.getLogger(__name__)


def filter_runs(activities: list[dict]) -> list[dict]:
    """Keep activities whose type or sport_type is a running kind."""
    return [a for a in activities if counts_toward_mileage(a)]


def _start_point(data: dict) -> tuple[Optional[float], Optional[float]]:
    latlng = data.get("start_latlng")
    if latlng and len(latlng) == 2:
        return latlng[0], latlng[1]
    return None, None


def activity_values(user_id: str, data: dict) -> Optional[dict]:
    """
    Column values for one Strava activity.

    The in-region flag and miles are computed here, once, at write time.

    Returns:
        Dict of Activity columns, or None if the payload has no usable
        id or start date
    """
    strava_id = data.get("id")
    activity_date = parse_strava_date(data.get("start_date"))
    if strava_id is None or activity_date is None:
        logger.warning(f"Skipping malformed Strava activity for user {user_id}: {strava_id}")
        return None

    lat, lon = _start_point(data)
    meters = data.get("distance") or 0.0

    return {
        "user_id": user_id,
        "strava_activity_id": strava_id,
        "activity_type": data.get("type") or data.get("sport_type"),
        "activity_date": activity_date,
        "distance_meters": meters,
        "distance_miles": meters_to_miles(meters),
        "moving_time_seconds": data.get("moving_time"),
        "elapsed_time_seconds": data.get("elapsed_time"),
        "total_elevation_gain": data.get("total_elevation_gain"),
        "average_speed": data.get("average_speed"),
        "max_speed": data.get("max_speed"),
        "average_heartrate": data.get("average_heartrate"),
        "max_heartrate": data.get("max_heartrate"),
        "start_latitude": lat,
        "start_longitude": lon,
        "city": data.get("location_city"),
        "state": data.get("location_state"),
        "country": data.get("location_country"),
        "in_dc_region": classify_start(lat, lon),
        "is_manual": bool(data.get("manual", False)),
        "synced_at": utcnow(),
    }

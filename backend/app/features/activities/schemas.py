"""
Activity schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class ActivityResponse(BaseModel):
    """Stored activity as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    strava_activity_id: int
    activity_type: str
    activity_date: datetime
    distance_miles: float
    moving_time_seconds: Optional[int]
    total_elevation_gain: Optional[float]
    in_dc_region: bool
    pace_min_per_mile: Optional[float] = None

"""
Mileage schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .tiers import AccessTier, next_tier


class NextTierInfo(BaseModel):
    """Next tier up and the miles still needed for it."""

    tier: AccessTier
    miles_remaining: float


class MileageSummaryResponse(BaseModel):
    """Mileage summary with progress toward the next tier."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    current_month_miles: float
    last_month_miles: float
    current_year_miles: float
    total_miles: float
    total_activities: int
    dc_activities: int
    last_activity_date: Optional[datetime]
    access_tier: AccessTier
    last_calculated_at: Optional[datetime]
    next_tier: Optional[NextTierInfo] = None

    @classmethod
    def from_summary(cls, summary) -> "MileageSummaryResponse":
        response = cls.model_validate(summary)
        upcoming = next_tier(summary.current_month_miles)
        if upcoming is not None:
            tier, remaining = upcoming
            response.next_tier = NextTierInfo(tier=tier, miles_remaining=remaining)
        return response


class CommunityStatsResponse(BaseModel):
    """Site-wide totals."""

    total_miles: float
    connected_users: int
    total_activities: int

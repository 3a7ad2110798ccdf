"""
Mileage aggregation and access tiers.

Usage:
    from app.features.mileage import MileageAggregator, tier_for_miles

    summary = await MileageAggregator(db).recalculate(user_id)
"""

from .models import MileageSummary
from .repository import MileageSummaryRepository
from .schemas import CommunityStatsResponse, MileageSummaryResponse, NextTierInfo
from .service import AggregationError, MileageAggregator
from .tiers import TIER_THRESHOLDS, AccessTier, next_tier, tier_for_miles

__all__ = [
    # Models
    "MileageSummary",
    # Repositories
    "MileageSummaryRepository",
    # Service
    "MileageAggregator",
    "AggregationError",
    # Tiers
    "AccessTier",
    "TIER_THRESHOLDS",
    "tier_for_miles",
    "next_tier",
    # Schemas
    "MileageSummaryResponse",
    "NextTierInfo",
    "CommunityStatsResponse",
]

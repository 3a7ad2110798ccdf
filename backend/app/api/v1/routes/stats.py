"""
Community Stats Routes
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.session import get_async_db
from app.features.activities import ActivityRepository
from app.features.mileage import CommunityStatsResponse, MileageSummaryRepository
from app.shared.units import round_miles

router = APIRouter(prefix="/stats", tags=["Stats"])


@router.get("/community", response_model=CommunityStatsResponse)
async def community_stats(db: AsyncSession = Depends(get_async_db)):
    """Site-wide in-region miles, connected runners and activity count."""
    total_miles, connected_users = await MileageSummaryRepository(db).community_totals()
    total_activities = await ActivityRepository(db).count_all()
    return CommunityStatsResponse(
        total_miles=round_miles(total_miles, places=1),
        connected_users=connected_users,
        total_activities=total_activities,
    )

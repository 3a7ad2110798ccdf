"""
Activity repositories.

Data access layer for imported activities.
"""

from datetime import datetime

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.repository import BaseRepository
from .models import Activity


class ActivityRepository(BaseRepository[Activity]):
    """Repository for imported Strava activities."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Activity)

    async def insert_if_new(self, **values) -> bool:
        """
        Insert an activity unless its Strava ID is already stored.

        Returns:
            True if inserted, False if the activity already existed
        """
        return await self.insert_or_ignore(["strava_activity_id"], **values)

    async def get_user_activities(
        self,
        user_id: str,
        limit: int = 50,
        since: datetime | None = None,
        in_region_only: bool = False
    ) -> list[Activity]:
        """
        Get user's activities, newest first.

        Args:
            user_id: User's ID
            limit: Maximum number of activities
            since: Only activities on or after this date
            in_region_only: Only activities flagged in-region

        Returns:
            List of activities
        """
        query = select(Activity).where(Activity.user_id == user_id)
        if since is not None:
            query = query.where(Activity.activity_date >= since)
        if in_region_only:
            query = query.where(Activity.in_dc_region.is_(True))
        query = query.order_by(desc(Activity.activity_date)).limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def count_all(self) -> int:
        """Count activities across all users."""
        result = await self.db.execute(select(func.count(Activity.id)))
        return result.scalar() or 0

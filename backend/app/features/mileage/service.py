"""
Mileage aggregation.

Recomputes a user's summary from scratch by scanning all of their
activities in one query. There is no incremental path, so a skipped or
failed recalculation is repaired by the next one.

Windows (UTC, anchored at call time):
- current month: [month_start, +inf)
- last month:    [previous_month_start, month_start)
- current year:  [year_start, +inf)

Windowed sums and the all-time sum count in-region activities only;
activity counts are all-time.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import and_, case, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.activities.models import Activity
from app.shared.dates import month_start, previous_month_start, utcnow, year_start
from app.shared.units import round_miles
from .models import MileageSummary
from .repository import MileageSummaryRepository
from .tiers import tier_for_miles

logger = logging.getLogger(__name__)


class AggregationError(Exception):
    """Recalculation failed at the database."""
    pass


def _windowed_miles(*conditions):
    """SUM(distance_miles) over in-region rows matching `conditions`."""
    return func.coalesce(
        func.sum(
            case(
                (and_(Activity.in_dc_region.is_(True), *conditions), Activity.distance_miles),
                else_=0.0,
            )
        ),
        0.0,
    )


class MileageAggregator:
    """
    Rebuilds mileage summaries.

    Usage:
        aggregator = MileageAggregator(db)
        summary = await aggregator.recalculate(user_id)
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.summaries = MileageSummaryRepository(db)

    async def recalculate(
        self,
        user_id: str,
        now: Optional[datetime] = None
    ) -> MileageSummary:
        """
        Recompute and persist the summary for a user.

        Args:
            user_id: User's ID
            now: Anchor for the calendar windows (default: current UTC time)

        Returns:
            The stored summary

        Raises:
            AggregationError: If the query or the write fails
        """
        now = now or utcnow()
        this_month = month_start(now)
        last_month = previous_month_start(now)
        this_year = year_start(now)

        query = (
            select(
                _windowed_miles(Activity.activity_date >= this_month),
                _windowed_miles(
                    Activity.activity_date >= last_month,
                    Activity.activity_date < this_month,
                ),
                _windowed_miles(Activity.activity_date >= this_year),
                _windowed_miles(),
                func.count(Activity.id),
                func.coalesce(
                    func.sum(case((Activity.in_dc_region.is_(True), 1), else_=0)),
                    0,
                ),
                func.max(Activity.activity_date),
            )
            .where(Activity.user_id == user_id)
        )

        try:
            row = (await self.db.execute(query)).one()
            (
                month_miles, prev_month_miles, year_miles, total_miles,
                total_count, region_count, last_date,
            ) = row

            current_month_miles = round_miles(month_miles)
            values = {
                "user_id": user_id,
                "current_month_miles": current_month_miles,
                "last_month_miles": round_miles(prev_month_miles),
                "current_year_miles": round_miles(year_miles),
                "total_miles": round_miles(total_miles),
                "total_activities": total_count,
                "dc_activities": int(region_count),
                "last_activity_date": last_date,
                "access_tier": tier_for_miles(current_month_miles).value,
                "last_calculated_at": now,
            }
            await self.summaries.save(values)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise AggregationError(f"Recalculation failed for user {user_id}: {e}") from e

        logger.info(
            f"Mileage recalculated for user {user_id}: "
            f"{values['current_month_miles']}mi this month, tier {values['access_tier']}"
        )
        return await self.summaries.get_for_user(user_id)

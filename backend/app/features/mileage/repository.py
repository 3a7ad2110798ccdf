"""
Mileage repositories.
"""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.repository import BaseRepository
from .models import MileageSummary


class MileageSummaryRepository(BaseRepository[MileageSummary]):
    """Repository for per-user mileage summaries."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, MileageSummary)

    async def get_for_user(self, user_id: str) -> MileageSummary | None:
        """Get summary for user, bypassing any stale identity-map copy."""
        return await self.db.get(MileageSummary, user_id, populate_existing=True)

    async def save(self, values: dict[str, Any]) -> None:
        """Insert or fully overwrite the summary keyed by user_id."""
        await self.upsert(["user_id"], values)

    async def community_totals(self) -> tuple[float, int]:
        """
        Totals across every summary.

        Returns:
            (sum of all-time in-region miles, number of summaries)
        """
        result = await self.db.execute(
            select(
                func.coalesce(func.sum(MileageSummary.total_miles), 0.0),
                func.count(MileageSummary.user_id),
            )
        )
        total_miles, users = result.one()
        return float(total_miles), users

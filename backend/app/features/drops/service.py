"""
Drop qualification.

Grants frozen access records to every user whose current-month miles
meet one of a drop's tier thresholds. Each tier band is written with a
single INSERT ... SELECT from mileage_summaries, skipping users that
already hold a grant for the drop:

- exclusive: m >= exclusive
- premium:   premium <= m < exclusive
- basic:     basic <= m < premium
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, String, literal, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.mileage.models import MileageSummary
from app.features.mileage.tiers import AccessTier
from app.shared.dates import utcnow
from .models import Drop, DropAccess
from .repository import DropAccessRepository, DropRepository

logger = logging.getLogger(__name__)


class DropNotFoundError(Exception):
    """No drop with the given ID."""
    pass


class DropQualificationService:
    """
    Drop access management.

    Usage:
        service = DropQualificationService(db)
        granted = await service.grant_access(drop_id)
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.drops = DropRepository(db)
        self.grants = DropAccessRepository(db)

    async def get_drop(self, drop_id: str) -> Drop:
        """
        Raises:
            DropNotFoundError: If the ID does not resolve
        """
        drop = await self.drops.get_by_id(drop_id)
        if drop is None:
            raise DropNotFoundError(f"Drop {drop_id} not found")
        return drop

    def _tier_bands(self, drop: Drop) -> list[tuple[AccessTier, float, Optional[float]]]:
        """(tier, lower bound inclusive, upper bound exclusive) per band."""
        return [
            (AccessTier.EXCLUSIVE, drop.required_miles_exclusive, None),
            (AccessTier.PREMIUM, drop.required_miles_premium, drop.required_miles_exclusive),
            (AccessTier.BASIC, drop.required_miles_basic, drop.required_miles_premium),
        ]

    async def grant_access(self, drop_id: str, now: Optional[datetime] = None) -> int:
        """
        Grant access to every qualifying user.

        Existing grants are left as they are, so repeated runs are
        idempotent and frozen mileage never changes.

        Args:
            drop_id: Drop to qualify users for
            now: Qualification timestamp (default: current UTC time)

        Returns:
            Total number of grants for the drop, pre-existing included

        Raises:
            DropNotFoundError: If the drop does not exist (nothing is written)
        """
        drop = await self.get_drop(drop_id)
        now = now or utcnow()
        miles = MileageSummary.current_month_miles

        try:
            for tier, lower, upper in self._tier_bands(drop):
                source = select(
                    literal(drop.id, String()),
                    MileageSummary.user_id,
                    literal(tier.value, String()),
                    miles,
                    literal(now, DateTime()),
                    literal(now, DateTime()),
                ).where(miles >= literal(lower, Float()))
                if upper is not None:
                    source = source.where(miles < literal(upper, Float()))

                await self.grants.insert_from_select_or_ignore(
                    ["drop_id", "user_id"],
                    [
                        "drop_id", "user_id", "access_tier",
                        "mileage_at_qualification", "qualified_at", "created_at",
                    ],
                    source,
                )
            granted = await self.grants.count_for_drop(drop.id)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Drop {drop.slug}: {granted} users have access")
        return granted

    async def has_access(self, user_id: str, drop_id: str) -> bool:
        """Whether a grant exists. No side effects."""
        return await self.grants.exists_for(user_id, drop_id)

    async def list_user_access(self, user_id: str) -> list[DropAccess]:
        """All grants held by a user."""
        return await self.grants.get_for_user(user_id)

    async def mark_viewed(
        self,
        user_id: str,
        drop_id: str,
        now: Optional[datetime] = None
    ) -> bool:
        """
        Record the first time a user viewed a drop they can access.

        Returns:
            True if first_viewed_at was set by this call
        """
        updated = await self.grants.set_first_viewed(user_id, drop_id, now or utcnow())
        await self.db.commit()
        return updated

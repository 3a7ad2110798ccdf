"""
Drop repositories.

Data access layer for drops and access grants.
"""

from datetime import datetime

from sqlalchemy import desc, exists, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.repository import BaseRepository
from .models import Drop, DropAccess


class DropRepository(BaseRepository[Drop]):
    """Repository for drops."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Drop)

    async def get_by_slug(self, slug: str) -> Drop | None:
        return await self.get_by(slug=slug)

    async def get_published(self) -> list[Drop]:
        """Published drops, newest release first."""
        result = await self.db.execute(
            select(Drop)
            .where(Drop.is_published.is_(True))
            .order_by(desc(Drop.release_date))
        )
        return list(result.scalars().all())


class DropAccessRepository(BaseRepository[DropAccess]):
    """Repository for drop access grants."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, DropAccess)

    async def exists_for(self, user_id: str, drop_id: str) -> bool:
        result = await self.db.execute(
            select(
                exists().where(
                    DropAccess.user_id == user_id,
                    DropAccess.drop_id == drop_id,
                )
            )
        )
        return bool(result.scalar())

    async def count_for_drop(self, drop_id: str) -> int:
        result = await self.db.execute(
            select(func.count(DropAccess.id)).where(DropAccess.drop_id == drop_id)
        )
        return result.scalar() or 0

    async def get_for_user(self, user_id: str) -> list[DropAccess]:
        """User's grants, most recent qualification first."""
        result = await self.db.execute(
            select(DropAccess)
            .where(DropAccess.user_id == user_id)
            .order_by(desc(DropAccess.qualified_at))
        )
        return list(result.scalars().all())

    async def set_first_viewed(self, user_id: str, drop_id: str, viewed_at: datetime) -> bool:
        """
        Stamp first_viewed_at unless already set.

        Returns:
            True if the grant was updated
        """
        result = await self.db.execute(
            update(DropAccess)
            .where(DropAccess.user_id == user_id)
            .where(DropAccess.drop_id == drop_id)
            .where(DropAccess.first_viewed_at.is_(None))
            .values(first_viewed_at=viewed_at)
        )
        return result.rowcount > 0

"""
User repositories.

Data access layer for the User model.
"""

from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.repository import BaseRepository
from .models import User


class UserNotFoundError(Exception):
    """No user with the given ID."""
    pass


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_or_raise(self, user_id: str) -> User:
        """
        Get user by ID.

        Raises:
            UserNotFoundError: If the ID does not resolve
        """
        user = await self.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(f"User {user_id} not found")
        return user

    async def get_users_due_for_sync(self, synced_before: datetime) -> list[User]:
        """
        Connected users that were never synced or last synced before a cutoff.

        Args:
            synced_before: Users synced at or after this time are skipped

        Returns:
            Users ordered so never-synced users come first
        """
        result = await self.db.execute(
            select(User)
            .where(User.strava_access_token.is_not(None))
            .where(User.strava_refresh_token.is_not(None))
            .where(or_(User.last_synced_at.is_(None), User.last_synced_at < synced_before))
            .order_by(User.last_synced_at.is_not(None), User.last_synced_at)
        )
        return list(result.scalars().all())

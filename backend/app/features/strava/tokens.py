"""
Strava token lifecycle.

Credentials live on the User row. They are written in exactly two
places: `apply_new_grant` after a successful OAuth exchange, and the
refresh inside `get_valid_credential`. Both persist all fields in a
single commit.
"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.users.models import User
from app.features.users.repository import UserRepository
from app.features.users.schemas import AthleteProfile
from app.shared.dates import from_epoch, utcnow
from .client import StravaError
from .oauth import StravaOAuth

logger = logging.getLogger(__name__)


class NotConnectedError(Exception):
    """User has no stored Strava credentials."""
    pass


class TokenRefreshError(Exception):
    """Refreshing an expired access token failed."""
    pass


class AthleteAlreadyLinkedError(Exception):
    """The Strava athlete is already connected to another user."""
    pass


class TokenManager:
    """
    Reads, refreshes and stores Strava credentials.

    Usage:
        tokens = TokenManager(db)
        access_token = await tokens.get_valid_credential(user_id)
    """

    def __init__(self, db: AsyncSession, oauth: Optional[StravaOAuth] = None):
        self.db = db
        self.users = UserRepository(db)
        self.oauth = oauth or StravaOAuth()

    async def get_valid_credential(
        self,
        user_id: str,
        now: Optional[datetime] = None
    ) -> str:
        """
        Return an access token that is valid now, refreshing if expired.

        A token is expired when `now >= token_expires_at`.

        Raises:
            UserNotFoundError: If the user does not exist
            NotConnectedError: If either token is missing
            TokenRefreshError: If the refresh fails (stored state unchanged)
        """
        user = await self.users.get_or_raise(user_id)
        if not user.strava_connected:
            raise NotConnectedError(f"User {user_id} has not connected Strava")

        now = now or utcnow()
        if user.token_expires_at is not None and now < user.token_expires_at:
            return user.strava_access_token

        logger.info(f"Refreshing Strava token for user {user_id}")
        try:
            new_tokens = await self.oauth.refresh_token(user.strava_refresh_token)
            access_token = new_tokens["access_token"]
            refresh_token = new_tokens["refresh_token"]
            expires_at = from_epoch(new_tokens["expires_at"])
        except (StravaError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Strava token refresh failed for user {user_id}: {e}")
            raise TokenRefreshError(f"Token refresh failed for user {user_id}") from e

        user.strava_access_token = access_token
        user.strava_refresh_token = refresh_token
        user.token_expires_at = expires_at
        await self.db.commit()

        return access_token

    async def apply_new_grant(
        self,
        user_id: str,
        athlete_id: int,
        access_token: str,
        refresh_token: str,
        expires_at: int | datetime,
        profile: Optional[AthleteProfile] = None,
        now: Optional[datetime] = None
    ) -> User:
        """
        Store credentials and profile from a completed OAuth exchange.

        Args:
            user_id: User's ID (the OAuth `state`)
            athlete_id: Strava athlete ID
            access_token: New access token
            refresh_token: New refresh token
            expires_at: Expiry as epoch seconds or naive UTC datetime
            profile: Cached athlete profile fields

        Raises:
            UserNotFoundError: If the user does not exist
            AthleteAlreadyLinkedError: If another user holds the athlete ID
        """
        user = await self.users.get_or_raise(user_id)
        profile = profile or AthleteProfile()
        if not isinstance(expires_at, datetime):
            expires_at = from_epoch(expires_at)

        user.strava_athlete_id = athlete_id
        user.strava_access_token = access_token
        user.strava_refresh_token = refresh_token
        user.token_expires_at = expires_at
        user.connected_at = now or utcnow()
        user.first_name = profile.first_name or ""
        user.last_name = profile.last_name
        user.profile_picture_url = profile.profile_picture_url
        user.city = profile.city
        user.state = profile.state
        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(f"Athlete {athlete_id} already linked; rejected for user {user_id}")
            raise AthleteAlreadyLinkedError(
                f"Strava athlete {athlete_id} is connected to another account"
            ) from e

        logger.info(f"Strava connected for user {user_id} (athlete {athlete_id})")
        return user

    async def apply_token_response(self, user_id: str, token_data: dict) -> User:
        """`apply_new_grant` from a raw code-exchange response."""
        athlete = token_data.get("athlete") or {}
        return await self.apply_new_grant(
            user_id=user_id,
            athlete_id=athlete["id"],
            access_token=token_data["access_token"],
            refresh_token=token_data["refresh_token"],
            expires_at=token_data["expires_at"],
            profile=AthleteProfile.from_strava(athlete),
        )

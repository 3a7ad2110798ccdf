"""
Strava activity import.

Import Flow:
1. Get a valid access token (refreshing if expired)
2. Horizon = last_synced_at, or now - 90 days on first sync
3. Fetch every page of activities after the horizon
4. Keep running kinds (Run, TrailRun, VirtualRun)
5. Insert each keyed by Strava ID; existing IDs count as skipped
6. Stamp last_synced_at and commit
7. Recalculate mileage (failure is logged, never fails the import)

Nothing is written if fetching fails.
"""

import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.features.activities.repository import ActivityRepository
from app.features.mileage.service import AggregationError, MileageAggregator
from app.features.users.repository import UserRepository
from app.shared.dates import utcnow
from ..client import StravaClient
from ..tokens import TokenManager
from .activities import activity_values, filter_runs
from .config import SyncConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportResult:
    """Counts from one import run (after filtering to runs)."""

    total: int
    inserted: int
    skipped: int

    def to_dict(self) -> dict:
        return asdict(self)


class ActivityImporter:
    """
    Incremental Strava importer.

    Usage:
        importer = ActivityImporter(db)
        result = await importer.import_activities(user_id)
    """

    def __init__(
        self,
        db: AsyncSession,
        client: Optional[StravaClient] = None,
        tokens: Optional[TokenManager] = None,
        aggregator: Optional[MileageAggregator] = None
    ):
        self.db = db
        self.client = client or StravaClient()
        self.tokens = tokens or TokenManager(db)
        self.aggregator = aggregator or MileageAggregator(db)
        self.users = UserRepository(db)
        self.activities = ActivityRepository(db)

    async def import_activities(
        self,
        user_id: str,
        now: Optional[datetime] = None
    ) -> ImportResult:
        """
        Import new running activities for a user.

        Raises:
            UserNotFoundError: If the user does not exist
            NotConnectedError: If the user has no Strava credentials
            TokenRefreshError: If the expired token cannot be refreshed
            ProviderUnavailableError: If Strava is unreachable or fails
        """
        now = now or utcnow()
        access_token = await self.tokens.get_valid_credential(user_id, now=now)
        user = await self.users.get_or_raise(user_id)

        horizon = user.last_synced_at or (
            now - timedelta(days=SyncConfig.FIRST_SYNC_LOOKBACK_DAYS)
        )
        fetched = await self.client.get_all_activities(
            access_token,
            after=horizon,
            per_page=SyncConfig.ACTIVITIES_PER_PAGE,
        )
        runs = filter_runs(fetched)

        inserted = 0
        skipped = 0
        for data in runs:
            values = activity_values(user_id, data)
            if values is None:
                skipped += 1
                continue
            if await self.activities.insert_if_new(**values):
                inserted += 1
            else:
                skipped += 1

        user.last_synced_at = now
        await self.db.commit()

        logger.info(
            f"Imported activities for user {user_id}: "
            f"{len(runs)} runs, {inserted} new, {skipped} skipped"
        )

        try:
            await self.aggregator.recalculate(user_id, now=now)
        except AggregationError as e:
            logger.warning(f"Failed to recalculate mileage for user {user_id}: {e}")

        return ImportResult(total=len(runs), inserted=inserted, skipped=skipped)

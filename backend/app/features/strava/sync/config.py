"""
Strava sync configuration constants.
"""

from app.config import settings


class SyncConfig:
    """Configuration for sync behavior."""

    # How many activities to fetch per API call (Strava maximum)
    ACTIVITIES_PER_PAGE = 200

    # How far back the first sync looks (days)
    FIRST_SYNC_LOOKBACK_DAYS = 90

    # How many users to process per background batch
    USERS_PER_BATCH = 5

    # Minimum interval between background syncs for same user (hours)
    MIN_SYNC_INTERVAL_HOURS = settings.sync_interval_hours

    # Delay between users (seconds) to respect rate limits
    API_CALL_DELAY = 1.5

    # Background loop interval (seconds)
    BACKGROUND_SYNC_INTERVAL_SECONDS = 300  # 5 minutes

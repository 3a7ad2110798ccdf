"""
Strava sync services.

Provides:
- ActivityImporter: Incremental activity import
- BackgroundSyncRunner: Background sync task runner
"""

from .service import ActivityImporter, ImportResult
from .activities import activity_values, filter_runs
from .background import (
    BackgroundSyncRunner,
    SyncQueueManager,
    background_sync,
    sync_queue,
    trigger_user_sync,
    get_sync_stats,
)
from .config import SyncConfig

__all__ = [
    # Import
    "ActivityImporter",
    "ImportResult",
    "activity_values",
    "filter_runs",
    # Background
    "BackgroundSyncRunner",
    "SyncQueueManager",
    "background_sync",
    "sync_queue",
    "trigger_user_sync",
    "get_sync_stats",
    # Config
    "SyncConfig",
]

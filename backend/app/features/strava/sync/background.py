"""
Background sync runner.

Periodically queues connected users whose last sync is older than the
configured interval and imports their activities. Also runs the
one-off import triggered after a user connects Strava.
"""

import asyncio
import logging
from collections import deque
from datetime import timedelta
from typing import Callable, Optional

from app.features.users.repository import UserRepository
from app.shared.dates import utcnow
from .config import SyncConfig
from .service import ActivityImporter

logger = logging.getLogger(__name__)


# =============================================================================
# Sync Queue Manager
# =============================================================================

class SyncQueueManager:
    """
    Manages the queue of users to sync.

    Never-synced users are queued ahead of the rest. A user is never
    queued twice or while their sync is in progress.
    """

    def __init__(self):
        self._queue: deque[str] = deque()  # user_ids
        self._in_progress: set[str] = set()
        self._lock = asyncio.Lock()

    async def add_user(self, user_id: str, priority: bool = False) -> bool:
        """
        Add user to sync queue.

        Returns:
            True if the user was queued
        """
        async with self._lock:
            if user_id in self._queue or user_id in self._in_progress:
                return False
            if priority:
                self._queue.appendleft(user_id)
            else:
                self._queue.append(user_id)
            logger.debug(f"Added user {user_id} to sync queue (priority={priority})")
            return True

    async def get_next_users(self, count: int) -> list[str]:
        """Pop up to `count` users and mark them in progress."""
        async with self._lock:
            users = []
            for _ in range(min(count, len(self._queue))):
                user_id = self._queue.popleft()
                self._in_progress.add(user_id)
                users.append(user_id)
            return users

    async def mark_complete(self, user_id: str):
        async with self._lock:
            self._in_progress.discard(user_id)

    @property
    def queue_size(self) -> int:
        return len(self._queue)

    @property
    def in_progress_count(self) -> int:
        return len(self._in_progress)


# Global queue instance
sync_queue = SyncQueueManager()


# =============================================================================
# Background Sync Runner
# =============================================================================

class BackgroundSyncRunner:
    """
    Background task runner for activity import.

    Usage:
        runner = BackgroundSyncRunner()
        await runner.start(AsyncSessionLocal)
        # ... later ...
        await runner.stop()
    """

    def __init__(
        self,
        queue: Optional[SyncQueueManager] = None,
        importer_factory: Callable = ActivityImporter
    ):
        self.queue = queue or sync_queue
        self.importer_factory = importer_factory
        self._running = False
        self._task: Optional[asyncio.Task] = None
        self._db_factory = None
        # Strong references so one-off tasks are not garbage collected
        self._user_tasks: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._running

    def configure(self, db_factory):
        """Set the session factory without starting the loop."""
        self._db_factory = db_factory

    async def start(self, db_factory):
        """Start background sync loop."""
        if self._running:
            return

        self._running = True
        self._db_factory = db_factory
        self._task = asyncio.create_task(self._run_loop())
        logger.info("Background sync started")

    async def stop(self):
        """Stop background sync loop and wait for one-off syncs."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._user_tasks:
            await asyncio.gather(*self._user_tasks, return_exceptions=True)
        logger.info("Background sync stopped")

    async def _run_loop(self):
        """Main sync loop."""
        while self._running:
            try:
                await self.process_batch()
            except Exception as e:
                logger.error(f"Sync batch error: {e}")

            await asyncio.sleep(SyncConfig.BACKGROUND_SYNC_INTERVAL_SECONDS)

    async def process_batch(self) -> int:
        """
        Process one batch of queued users, refilling the queue when empty.

        Returns:
            Number of users processed
        """
        user_ids = await self.queue.get_next_users(SyncConfig.USERS_PER_BATCH)

        if not user_ids:
            await self.refresh_queue()
            return 0

        logger.info(f"Processing sync batch: {len(user_ids)} users")

        for user_id in user_ids:
            try:
                await self.sync_user(user_id)
                await asyncio.sleep(SyncConfig.API_CALL_DELAY)
            finally:
                await self.queue.mark_complete(user_id)

        return len(user_ids)

    async def sync_user(self, user_id: str):
        """
        Import one user's activities in a fresh session.

        Errors are logged; one user's failure never stops the batch.
        """
        try:
            async with self._db_factory() as db:
                importer = self.importer_factory(db)
                result = await importer.import_activities(user_id)
                logger.debug(f"Sync result for {user_id}: {result}")
                return result
        except Exception as e:
            logger.error(f"Error syncing user {user_id}: {e}")
            return None

    async def refresh_queue(self):
        """Queue connected users due for sync; never-synced users go first."""
        cutoff = utcnow() - timedelta(hours=SyncConfig.MIN_SYNC_INTERVAL_HOURS)

        async with self._db_factory() as db:
            users = await UserRepository(db).get_users_due_for_sync(cutoff)

        for user in users:
            await self.queue.add_user(user.id, priority=user.last_synced_at is None)

        logger.info(f"Refreshed sync queue: {self.queue.queue_size} users")

    def spawn_user_sync(self, user_id: str) -> asyncio.Task:
        """Run `sync_user` as a fire-and-forget task."""
        task = asyncio.create_task(self.sync_user(user_id))
        self._user_tasks.add(task)
        task.add_done_callback(self._user_tasks.discard)
        return task


# Global runner instance
background_sync = BackgroundSyncRunner()


# =============================================================================
# Helper Functions
# =============================================================================

async def trigger_user_sync(user_id: str) -> None:
    """
    Start an import for a user without waiting for it.

    Runs immediately when a session factory is configured, otherwise
    the user goes to the front of the background queue.
    """
    if background_sync._db_factory is not None:
        background_sync.spawn_user_sync(user_id)
        logger.info(f"Triggered sync for user {user_id}")
    else:
        await sync_queue.add_user(user_id, priority=True)
        logger.info(f"Added user {user_id} to sync queue")


def get_sync_stats() -> dict:
    """Get current sync statistics."""
    return {
        "running": background_sync.running,
        "queue_size": sync_queue.queue_size,
        "in_progress": sync_queue.in_progress_count,
    }

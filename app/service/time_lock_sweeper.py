"""
Time-lock sweeper.
Periodically unlocks LOCKED postcards whose unlock date has passed.
"""
import asyncio
import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.crud import postcard_crud
from app.service.unlocking import unlock_postcard

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimeLockSweeper:
    """
    Owns a background asyncio task that runs one sweep per interval.

    Each sweep runs in a worker thread with its own DB session, so request
    handling is never blocked. Records are unlocked independently: one
    failing record is logged and retried on the next sweep.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        notifier,
        interval_seconds: float = 600,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.session_factory = session_factory
        self.notifier = notifier
        self.interval_seconds = interval_seconds
        self.clock = clock
        self._run_lock = threading.Lock()
        self._task: Optional[asyncio.Task] = None
        self._stopping: Optional[asyncio.Event] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self, now: Optional[datetime] = None) -> int:
        """Run a single sweep. Returns how many postcards this sweep unlocked."""
        if not self._run_lock.acquire(blocking=False):
            logger.warning("Time-lock sweep already in progress, skipping")
            return 0
        try:
            return self._sweep(now or self.clock())
        finally:
            self._run_lock.release()

    def _sweep(self, now: datetime) -> int:
        logger.info("Checking for time-locked postcards to unlock...")
        db = self.session_factory()
        try:
            due = postcard_crud.list_due_time_locked(db, now=now)
            if not due:
                logger.info("No time-locked postcards ready to unlock")
                return 0

            logger.info(f"Found {len(due)} postcards to unlock")
            unlocked = 0
            for postcard in due:
                postcard_id = postcard.id
                try:
                    if unlock_postcard(db, postcard, self.notifier, trigger="time"):
                        unlocked += 1
                        logger.info(f"Unlocked postcard {postcard_id} for recipient {postcard.recipient_id}")
                except Exception:
                    db.rollback()
                    logger.exception(f"Failed to unlock postcard {postcard_id}")

            logger.info(f"Unlocked {unlocked} of {len(due)} time-locked postcards")
            return unlocked
        finally:
            db.close()

    async def _loop(self) -> None:
        while not self._stopping.is_set():
            try:
                await asyncio.to_thread(self.run_once)
            except Exception:
                logger.exception("Time-lock sweep crashed")
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.interval_seconds)
            except asyncio.TimeoutError:
                pass

    def start(self) -> None:
        """Start sweeping on the running event loop. Call from app startup."""
        if self.is_running:
            return
        self._stopping = asyncio.Event()
        self._task = asyncio.create_task(self._loop())
        logger.info(f"Time-lock sweeper started (every {self.interval_seconds}s)")

    async def stop(self) -> None:
        """Signal the loop to exit and wait for an in-flight sweep to finish."""
        if self._task is None:
            return
        self._stopping.set()
        await self._task
        self._task = None
        logger.info("Time-lock sweeper stopped")

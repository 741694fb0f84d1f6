"""
Run one time-lock sweep and exit.
For deployments that schedule the sweep externally (cron, ECS scheduled task)
with TIME_LOCK_SWEEPER_ENABLED=false on the API.

Run from project root: python -m scripts.run_time_lock_sweep
"""
import logging
import sys

# Add project root so app imports work
sys.path.insert(0, ".")

from app.core.database import SessionLocal
from app.notification import notification_dispatcher
from app.service.time_lock_sweeper import TimeLockSweeper

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def run_sweep() -> int:
    sweeper = TimeLockSweeper(session_factory=SessionLocal, notifier=notification_dispatcher)
    unlocked = sweeper.run_once()
    logger.info("Sweep finished: %s postcard(s) unlocked.", unlocked)
    return unlocked


if __name__ == "__main__":
    run_sweep()

"""
Background scheduler for periodic maintenance.
Handles:
- Nightly refresh of cached streaks, so streaks broken by inactivity
  show as 0 without waiting for the next diary entry
"""

import logging
from typing import Callable, Optional
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.orm import Session

from emolink.constants import STREAK_REFRESH_TIME
from emolink.database import SessionLocal
from emolink.exceptions import InvalidTimeFormatException
from emolink.services.date_service import DateService
from emolink.services.streak_service import StreakService

logger = logging.getLogger("emolink.scheduler")

STREAK_REFRESH_JOB_ID = "streak_refresh"


def run_streak_refresh(session_factory: Callable[[], Session] = SessionLocal) -> int:
    """Job: recompute cached streaks for every profile"""
    db = session_factory()
    try:
        refreshed = StreakService(db).refresh_all()
        logger.info(f"Streak refresh finished: {refreshed} profiles")
        return refreshed
    except Exception as e:
        logger.error(f"Scheduler Error (Streak refresh): {e}")
        db.rollback()
        return 0
    finally:
        db.close()


class StreakRefreshScheduler:
    """
    Owns the APScheduler instance and whether its jobs were registered.

    The application keeps one instance on its state; tests create their own.
    """

    def __init__(
        self,
        refresh_time: str = STREAK_REFRESH_TIME,
        session_factory: Callable[[], Session] = SessionLocal,
        scheduler: Optional[AsyncIOScheduler] = None
    ):
        self.refresh_time = refresh_time
        self.session_factory = session_factory
        self.scheduler = scheduler or AsyncIOScheduler()
        self.jobs_scheduled = False

    def schedule_jobs(self) -> None:
        """Register jobs once per instance"""
        if self.jobs_scheduled:
            return

        try:
            refresh_at = DateService.parse_time(self.refresh_time)
        except InvalidTimeFormatException:
            logger.warning(f"Invalid streak refresh time '{self.refresh_time}', using 00:05")
            refresh_at = DateService.parse_time("00:05")

        self.scheduler.add_job(
            run_streak_refresh,
            CronTrigger(hour=refresh_at.hour, minute=refresh_at.minute),
            kwargs={"session_factory": self.session_factory},
            id=STREAK_REFRESH_JOB_ID,
            replace_existing=True
        )
        self.jobs_scheduled = True
        logger.info(f"Scheduled jobs: {[job.id for job in self.scheduler.get_jobs()]}")

    def start(self) -> None:
        """Start the scheduler (requires a running event loop)"""
        self.schedule_jobs()
        if not self.scheduler.running:
            self.scheduler.start()
            logger.info(">>> APScheduler STARTED <<<")

    def stop(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("APScheduler stopped")

    def reset(self) -> None:
        """Stop and drop all jobs so they can be registered again"""
        self.stop()
        self.scheduler.remove_all_jobs()
        self.jobs_scheduled = False

"""
Streak calculation service.
Counts consecutive local calendar days with at least one diary entry.
"""
from dataclasses import dataclass
from datetime import datetime, date, timedelta
from typing import Iterable, List, Optional, Tuple
import logging

from sqlalchemy.orm import Session

from emolink.constants import STREAK_MILESTONES
from emolink.repositories.diary_repository import EmotionEntryRepository
from emolink.repositories.profile_repository import ProfileRepository
from emolink.services.date_service import DateService

logger = logging.getLogger("emolink.streaks")


@dataclass(frozen=True)
class StreakResult:
    """Outcome of a streak computation"""
    current_streak: int
    longest_streak: int
    last_entry_date: Optional[date]


class StreakCalculator:
    """Pure streak computations over in-memory activity timestamps"""

    @staticmethod
    def compute_streak(
        timestamps: Iterable[datetime],
        today: date,
        tz=None
    ) -> StreakResult:
        """
        Compute current and longest consecutive-day streaks.

        Multiple entries on the same day count once. The current streak is
        anchored at today, or at yesterday when there is no entry today;
        otherwise it is broken (0).

        Args:
            timestamps: Activity instants for one user, any order
            today: Caller's local date
            tz: Timezone used to derive civil dates from aware instants

        Returns:
            StreakResult
        """
        days = {DateService.to_civil_date(ts, tz) for ts in timestamps}

        if not days:
            return StreakResult(current_streak=0, longest_streak=0, last_entry_date=None)

        current_streak = StreakCalculator._current_streak(days, today)
        longest_streak = StreakCalculator.longest_run(days)

        return StreakResult(
            current_streak=current_streak,
            longest_streak=longest_streak,
            last_entry_date=max(days)
        )

    @staticmethod
    def _current_streak(days: set, today: date) -> int:
        """Walk backward from today (or yesterday) until the first gap"""
        yesterday = today - timedelta(days=1)
        if today in days:
            anchor = today
        elif yesterday in days:
            anchor = yesterday
        else:
            return 0

        streak = 1
        check_date = anchor - timedelta(days=1)
        while check_date in days:
            streak += 1
            check_date -= timedelta(days=1)
        return streak

    @staticmethod
    def longest_run(days: Iterable[date]) -> int:
        """Length of the longest run of consecutive dates"""
        ordered = sorted(set(days))
        if not ordered:
            return 0

        run = 1
        longest = 1
        for prev, current in zip(ordered, ordered[1:]):
            if (current - prev).days == 1:
                run += 1
                longest = max(longest, run)
            else:
                run = 1
        return longest

    @staticmethod
    def reached_milestone(current_streak: int) -> Optional[int]:
        """Return the milestone hit exactly by this streak, if any"""
        if current_streak in STREAK_MILESTONES:
            return current_streak
        return None


class StreakService:
    """Service for loading activity and keeping cached streaks up to date"""

    def __init__(self, db: Session):
        self.db = db
        self.entry_repo = EmotionEntryRepository()
        self.profile_repo = ProfileRepository()
        self.date_service = DateService()

    def get_streak(self, user_id: str, today: Optional[date] = None) -> StreakResult:
        """Compute the streak for a user from their diary entries"""
        tz = self.date_service.get_local_timezone()
        today = today or self.date_service.get_local_today(tz)
        timestamps = self.entry_repo.get_timestamps(self.db, user_id)
        return StreakCalculator.compute_streak(timestamps, today, tz)

    def refresh_profile_streak(
        self,
        user_id: str,
        today: Optional[date] = None
    ) -> Tuple[StreakResult, Optional[int]]:
        """
        Recompute a user's streak and store it on their profile.

        Returns:
            Tuple of (streak result, milestone reached by this refresh or None)
        """
        result = self.get_streak(user_id, today)
        profile = self.profile_repo.get_or_create(self.db, user_id)

        previous_streak = profile.current_streak or 0
        profile.current_streak = result.current_streak
        profile.longest_streak = result.longest_streak
        profile.last_entry_date = result.last_entry_date
        self.profile_repo.update(self.db, profile)

        milestone = None
        if result.current_streak != previous_streak:
            milestone = StreakCalculator.reached_milestone(result.current_streak)
        if milestone:
            logger.info(f"User {user_id} reached a {milestone}-day streak")

        return result, milestone

    def refresh_all(self, today: Optional[date] = None) -> int:
        """Refresh cached streaks for every profile, returns count refreshed"""
        profiles: List = self.profile_repo.get_all(self.db)
        for profile in profiles:
            self.refresh_profile_streak(profile.user_id, today)
        return len(profiles)

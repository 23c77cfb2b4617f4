"""
Diary service.
Handles emotion entries and the rewards that follow a new entry.
"""
import logging
from datetime import date
from typing import Optional
from sqlalchemy.orm import Session

from emolink.models import EmotionEntry
from emolink.schemas import EmotionEntryCreate, EmotionEntryUpdate
from emolink.repositories.diary_repository import EmotionEntryRepository
from emolink.services.date_service import DateService
from emolink.services.goal_service import GoalService
from emolink.services.points_service import PointsService
from emolink.services.streak_service import StreakService
from emolink.exceptions import EntryNotFoundException, ValidationException
from emolink.constants import ACTIVITY_DIARY_ENTRY, POINTS_PER_DIARY_ENTRY

logger = logging.getLogger("emolink.diary")


class DiaryService:
    """Service for managing diary entries"""

    def __init__(self, db: Session):
        self.db = db
        self.entry_repo = EmotionEntryRepository()
        self.points_service = PointsService(db)
        self.streak_service = StreakService(db)
        self.goal_service = GoalService(db)
        self.date_service = DateService()

    def create_entry(self, entry_data: EmotionEntryCreate, today: Optional[date] = None) -> dict:
        """
        Create a diary entry, award points, refresh the streak and the
        open goals for the entry's emotion.

        Returns:
            Dictionary with entry, points (new total), streak, milestone and
            completed_goals (IDs of goals this entry completed)
        """
        if not entry_data.user_id:
            raise ValidationException("user_id", "user_id is required")

        now = self.date_service.local_now(self.date_service.get_local_timezone())
        entry = EmotionEntry(**entry_data.model_dump(), created_at=now, updated_at=now)
        entry = self.entry_repo.create(self.db, entry)
        completed_goals = self.goal_service.refresh_user_goals(entry.user_id, entry.emotion_type)

        points = self.points_service.add_points(
            entry.user_id,
            POINTS_PER_DIARY_ENTRY,
            ACTIVITY_DIARY_ENTRY,
            f"Diary entry: {entry.emotion_type}"
        )
        streak, milestone = self.streak_service.refresh_profile_streak(entry.user_id, today)

        logger.info(f"Diary entry {entry.id} created for {entry.user_id}, streak {streak.current_streak}")
        return {
            "entry": entry,
            "points": points,
            "streak": streak,
            "milestone": milestone,
            "completed_goals": [goal.id for goal in completed_goals]
        }

    def get_user_entries(self, user_id: str, page: int = 1, limit: int = 10) -> dict:
        """Get a page (1-based) of a user's entries, newest first"""
        entries, total = self.entry_repo.get_page(self.db, user_id, page, limit)
        return {
            "entries": entries,
            "total": total,
            "has_more": total > page * limit
        }

    def get_entry(self, entry_id: int) -> EmotionEntry:
        entry = self.entry_repo.get_by_id(self.db, entry_id)
        if not entry:
            raise EntryNotFoundException(entry_id)
        return entry

    def update_entry(self, entry_id: int, entry_update: EmotionEntryUpdate) -> EmotionEntry:
        entry = self.get_entry(entry_id)

        update_data = entry_update.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(entry, key, value)
        entry.updated_at = self.date_service.local_now(self.date_service.get_local_timezone())

        return self.entry_repo.update(self.db, entry)

    def delete_entry(self, entry_id: int) -> None:
        """Delete an entry and refresh the owner's cached streak"""
        entry = self.get_entry(entry_id)
        user_id = entry.user_id
        self.entry_repo.delete(self.db, entry)
        self.streak_service.refresh_profile_streak(user_id)

"""
Goal management service.
Handles emotion goals: log one emotion N times within a timeframe to earn bonus points.
"""
import logging
from datetime import timedelta
from typing import List, Optional
from sqlalchemy.orm import Session

from emolink.models import WeeklyGoal
from emolink.schemas import WeeklyGoalCreate
from emolink.repositories.diary_repository import EmotionEntryRepository
from emolink.repositories.goal_repository import WeeklyGoalRepository
from emolink.services.date_service import DateService
from emolink.services.points_service import PointsService
from emolink.exceptions import GoalNotFoundException, ValidationException
from emolink.constants import ACTIVITY_GOAL_COMPLETED, GOAL_TIMEFRAMES

logger = logging.getLogger("emolink.goals")


class GoalService:
    """Service for managing emotion goals"""

    def __init__(self, db: Session):
        self.db = db
        self.goal_repo = WeeklyGoalRepository()
        self.entry_repo = EmotionEntryRepository()
        self.points_service = PointsService(db)
        self.date_service = DateService()

    def get_goals(self, user_id: str, completed: Optional[bool] = None) -> List[WeeklyGoal]:
        """Get a user's goals, optionally only completed or only open ones"""
        return self.goal_repo.get_for_user(self.db, user_id, completed)

    def get_goal(self, goal_id: int) -> WeeklyGoal:
        goal = self.goal_repo.get_by_id(self.db, goal_id)
        if not goal:
            raise GoalNotFoundException(goal_id)
        return goal

    def create_goal(self, goal_data: WeeklyGoalCreate) -> WeeklyGoal:
        """
        Create a goal starting now.

        Target count and bonus come from the timeframe. Only one open goal
        per emotion is allowed.

        Raises:
            ValidationException: If the timeframe is unknown or an open goal
                already exists for the emotion
        """
        if goal_data.timeframe not in GOAL_TIMEFRAMES:
            raise ValidationException("timeframe", f"unknown timeframe '{goal_data.timeframe}'")

        if self.goal_repo.get_incomplete(self.db, goal_data.user_id, goal_data.emotion_type):
            raise ValidationException(
                "emotion_type",
                f"an open goal for '{goal_data.emotion_type}' already exists"
            )

        days, target_count, bonus_points = GOAL_TIMEFRAMES[goal_data.timeframe]
        start = self.date_service.local_now(self.date_service.get_local_timezone())

        goal = WeeklyGoal(
            user_id=goal_data.user_id,
            emotion_type=goal_data.emotion_type,
            target_count=target_count,
            timeframe=goal_data.timeframe,
            start_date=start,
            end_date=start + timedelta(days=days),
            bonus_points=bonus_points,
            progress=0,
            completed=False,
            created_at=start
        )
        goal = self.goal_repo.create(self.db, goal)
        logger.info(f"Goal {goal.id} created for {goal.user_id}: {goal.emotion_type} x{target_count} ({goal.timeframe})")
        return goal

    def update_progress(self, goal_id: int) -> WeeklyGoal:
        """
        Recount matching entries in the goal window and mark completion.

        The bonus is credited once, when the goal first becomes complete.
        A completed goal stays completed.
        """
        goal = self.get_goal(goal_id)
        self._refresh(goal)
        return goal

    def refresh_user_goals(self, user_id: str, emotion_type: Optional[str] = None) -> List[WeeklyGoal]:
        """
        Refresh a user's open goals.

        Returns:
            Goals completed by this refresh
        """
        completed = []
        for goal in self.goal_repo.get_incomplete(self.db, user_id, emotion_type):
            if self._refresh(goal):
                completed.append(goal)
        return completed

    def _refresh(self, goal: WeeklyGoal) -> bool:
        """Update one goal, return True if it was just completed"""
        goal.progress = self.entry_repo.count_in_range(
            self.db, goal.user_id, goal.emotion_type, goal.start_date, goal.end_date
        )
        just_completed = not goal.completed and goal.progress >= goal.target_count
        if just_completed:
            goal.completed = True
        self.goal_repo.update(self.db, goal)

        if just_completed:
            self.points_service.add_points(
                goal.user_id,
                goal.bonus_points,
                ACTIVITY_GOAL_COMPLETED,
                f"Goal completed: {goal.emotion_type} ({goal.timeframe})"
            )
            logger.info(f"Goal {goal.id} completed by {goal.user_id}, +{goal.bonus_points} points")
        return just_completed

    def delete_goal(self, goal_id: int) -> None:
        goal = self.get_goal(goal_id)
        self.goal_repo.delete(self.db, goal)

"""
Points service.
Credits reward points to profiles and keeps the points history.
"""
import logging
from typing import Optional
from sqlalchemy.orm import Session

from emolink.models import PointHistory
from emolink.repositories.profile_repository import ProfileRepository, PointHistoryRepository

logger = logging.getLogger("emolink.points")


class PointsService:
    """Service for points management"""

    def __init__(self, db: Session):
        self.db = db
        self.profile_repo = ProfileRepository()
        self.history_repo = PointHistoryRepository()

    def add_points(
        self,
        user_id: str,
        points: int,
        activity_type: Optional[str] = None,
        description: Optional[str] = None
    ) -> int:
        """
        Add points to a user's total and record the activity.

        History is recorded only when both activity_type and description are
        given and points is positive.

        Args:
            user_id: User to credit
            points: Points to add (may be negative)
            activity_type: One of the ACTIVITY_* constants
            description: Human-readable reason

        Returns:
            New points total
        """
        profile = self.profile_repo.get_or_create(self.db, user_id)
        profile.points = (profile.points or 0) + points
        self.profile_repo.update(self.db, profile)

        if activity_type and description and points > 0:
            self.history_repo.create(self.db, PointHistory(
                user_id=user_id,
                activity_type=activity_type,
                description=description,
                points=points
            ))

        logger.info(f"User {user_id}: {points:+d} points ({activity_type or 'manual'}), total {profile.points}")
        return profile.points

    def add_parent_points(self, user_id: str, points: int) -> int:
        """Add points to the parent side of a family profile"""
        profile = self.profile_repo.get_or_create(self.db, user_id)
        profile.parent_points = (profile.parent_points or 0) + points
        self.profile_repo.update(self.db, profile)
        return profile.parent_points

    def get_history(self, user_id: str, page: int = 0, per_page: int = 10) -> dict:
        """
        Get paginated points history (page is 0-based).

        Returns:
            Dictionary with items, total_count and has_more
        """
        total_count = self.history_repo.count_for_user(self.db, user_id)
        items = self.history_repo.get_page(self.db, user_id, page, per_page)
        return {
            "items": items,
            "total_count": total_count,
            "has_more": len(items) == per_page
        }

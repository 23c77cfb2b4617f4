"""
Profile repository - Data access layer for profiles and points history.
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from emolink.models import Profile, PointHistory


class ProfileRepository:
    """Repository for Profile data access"""

    @staticmethod
    def get_by_user_id(db: Session, user_id: str) -> Optional[Profile]:
        """Get profile by user ID"""
        return db.query(Profile).filter(Profile.user_id == user_id).first()

    @staticmethod
    def get_or_create(db: Session, user_id: str) -> Profile:
        """
        Get profile (creates with defaults if not exists).

        Returns:
            Profile object
        """
        profile = db.query(Profile).filter(Profile.user_id == user_id).first()
        if not profile:
            profile = Profile(user_id=user_id)
            db.add(profile)
            db.commit()
            db.refresh(profile)
        return profile

    @staticmethod
    def get_all(db: Session) -> List[Profile]:
        """Get all profiles"""
        return db.query(Profile).order_by(Profile.id).all()

    @staticmethod
    def update(db: Session, profile: Profile) -> Profile:
        """Update existing profile"""
        db.commit()
        db.refresh(profile)
        return profile


class PointHistoryRepository:
    """Repository for PointHistory data access"""

    @staticmethod
    def create(db: Session, history: PointHistory) -> PointHistory:
        """Create new point history entry"""
        db.add(history)
        db.commit()
        db.refresh(history)
        return history

    @staticmethod
    def count_for_user(db: Session, user_id: str) -> int:
        """Count history entries for a user"""
        return db.query(PointHistory).filter(PointHistory.user_id == user_id).count()

    @staticmethod
    def get_page(db: Session, user_id: str, page: int = 0, per_page: int = 10) -> List[PointHistory]:
        """Get one page (0-based) of a user's history, newest first"""
        return db.query(PointHistory).filter(
            PointHistory.user_id == user_id
        ).order_by(
            PointHistory.created_at.desc(), PointHistory.id.desc()
        ).offset(page * per_page).limit(per_page).all()

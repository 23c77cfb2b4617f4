"""
Goal repository - Data access layer for WeeklyGoal model.
"""
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import and_

from emolink.models import WeeklyGoal


class WeeklyGoalRepository:
    """Repository for WeeklyGoal data access"""

    @staticmethod
    def get_by_id(db: Session, goal_id: int) -> Optional[WeeklyGoal]:
        """Get goal by ID"""
        return db.query(WeeklyGoal).filter(WeeklyGoal.id == goal_id).first()

    @staticmethod
    def get_for_user(
        db: Session,
        user_id: str,
        completed: Optional[bool] = None
    ) -> List[WeeklyGoal]:
        """Get a user's goals, newest first, optionally filtered by completion"""
        query = db.query(WeeklyGoal).filter(WeeklyGoal.user_id == user_id)
        if completed is not None:
            query = query.filter(WeeklyGoal.completed == completed)
        return query.order_by(WeeklyGoal.created_at.desc(), WeeklyGoal.id.desc()).all()

    @staticmethod
    def get_incomplete(
        db: Session,
        user_id: str,
        emotion_type: Optional[str] = None
    ) -> List[WeeklyGoal]:
        """Get goals still in progress, optionally for a single emotion"""
        query = db.query(WeeklyGoal).filter(
            and_(
                WeeklyGoal.user_id == user_id,
                WeeklyGoal.completed == False
            )
        )
        if emotion_type is not None:
            query = query.filter(WeeklyGoal.emotion_type == emotion_type)
        return query.order_by(WeeklyGoal.id).all()

    @staticmethod
    def create(db: Session, goal: WeeklyGoal) -> WeeklyGoal:
        """Create new goal"""
        db.add(goal)
        db.commit()
        db.refresh(goal)
        return goal

    @staticmethod
    def update(db: Session, goal: WeeklyGoal) -> WeeklyGoal:
        """Update existing goal"""
        db.commit()
        db.refresh(goal)
        return goal

    @staticmethod
    def delete(db: Session, goal: WeeklyGoal) -> None:
        """Delete a goal"""
        db.delete(goal)
        db.commit()

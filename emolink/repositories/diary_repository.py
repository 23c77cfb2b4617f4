"""
Diary repository - Data access layer for EmotionEntry model.
Handles all database queries related to diary entries.
"""
from datetime import datetime
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import and_

from emolink.models import EmotionEntry


class EmotionEntryRepository:
    """Repository for EmotionEntry data access"""

    @staticmethod
    def get_by_id(db: Session, entry_id: int) -> Optional[EmotionEntry]:
        """Get diary entry by ID"""
        return db.query(EmotionEntry).filter(EmotionEntry.id == entry_id).first()

    @staticmethod
    def get_page(
        db: Session,
        user_id: str,
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[EmotionEntry], int]:
        """Get one page of a user's entries (newest first) and the total count"""
        query = db.query(EmotionEntry).filter(EmotionEntry.user_id == user_id)
        total = query.count()
        entries = query.order_by(
            EmotionEntry.created_at.desc()
        ).offset((page - 1) * limit).limit(limit).all()
        return entries, total

    @staticmethod
    def get_timestamps(db: Session, user_id: str) -> List[datetime]:
        """Get creation timestamps of all entries for a user, newest first"""
        rows = db.query(EmotionEntry.created_at).filter(
            EmotionEntry.user_id == user_id
        ).order_by(EmotionEntry.created_at.desc()).all()
        return [row[0] for row in rows if row[0] is not None]

    @staticmethod
    def count_in_range(
        db: Session,
        user_id: str,
        emotion_type: str,
        start: datetime,
        end: datetime
    ) -> int:
        """Count a user's entries of one emotion created between start and end (inclusive)"""
        return db.query(EmotionEntry).filter(
            and_(
                EmotionEntry.user_id == user_id,
                EmotionEntry.emotion_type == emotion_type,
                EmotionEntry.created_at >= start,
                EmotionEntry.created_at <= end
            )
        ).count()

    @staticmethod
    def create(db: Session, entry: EmotionEntry) -> EmotionEntry:
        """Create new diary entry"""
        db.add(entry)
        db.commit()
        db.refresh(entry)
        return entry

    @staticmethod
    def update(db: Session, entry: EmotionEntry) -> EmotionEntry:
        """Update existing diary entry"""
        db.commit()
        db.refresh(entry)
        return entry

    @staticmethod
    def delete(db: Session, entry: EmotionEntry) -> None:
        """Delete a diary entry"""
        db.delete(entry)
        db.commit()

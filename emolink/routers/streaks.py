"""
Streak HTTP routes.
"""
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from emolink.database import get_db
from emolink.auth import verify_api_key
from emolink.schemas import StreakResponse
from emolink.services.streak_service import StreakService

router = APIRouter(prefix="/api/streaks", tags=["streaks"], dependencies=[Depends(verify_api_key)])


@router.get("/{user_id}", response_model=StreakResponse)
def get_streak(
    user_id: str,
    today: Optional[date] = Query(None, description="Caller's local date, defaults to server local date"),
    db: Session = Depends(get_db)
):
    """Get current and longest diary streaks for a user."""
    result = StreakService(db).get_streak(user_id, today)
    return StreakResponse(
        user_id=user_id,
        current_streak=result.current_streak,
        longest_streak=result.longest_streak,
        last_entry_date=result.last_entry_date
    )

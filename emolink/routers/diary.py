"""
Diary HTTP routes.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from emolink.database import get_db
from emolink.auth import verify_api_key
from emolink.constants import DEFAULT_PAGE_SIZE
from emolink.schemas import (
    EmotionEntryCreate, EmotionEntryUpdate, EmotionEntryResponse,
    EntryCreatedResponse, EntryPageResponse, StreakResponse
)
from emolink.services.diary_service import DiaryService

router = APIRouter(prefix="/api/diary", tags=["diary"], dependencies=[Depends(verify_api_key)])


@router.post("/entries", response_model=EntryCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_entry(entry: EmotionEntryCreate, db: Session = Depends(get_db)):
    """Create a diary entry, award points and refresh the streak."""
    result = DiaryService(db).create_entry(entry)
    streak = result["streak"]
    return {
        "entry": result["entry"],
        "points": result["points"],
        "streak": StreakResponse(
            user_id=result["entry"].user_id,
            current_streak=streak.current_streak,
            longest_streak=streak.longest_streak,
            last_entry_date=streak.last_entry_date,
            milestone=result["milestone"]
        ),
        "completed_goals": result["completed_goals"]
    }


@router.get("/users/{user_id}/entries", response_model=EntryPageResponse)
def get_user_entries(
    user_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Get a page of a user's entries, newest first."""
    return DiaryService(db).get_user_entries(user_id, page, limit)


@router.get("/entries/{entry_id}", response_model=EmotionEntryResponse)
def get_entry(entry_id: int, db: Session = Depends(get_db)):
    return DiaryService(db).get_entry(entry_id)


@router.patch("/entries/{entry_id}", response_model=EmotionEntryResponse)
def update_entry(entry_id: int, entry: EmotionEntryUpdate, db: Session = Depends(get_db)):
    return DiaryService(db).update_entry(entry_id, entry)


@router.delete("/entries/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_entry(entry_id: int, db: Session = Depends(get_db)):
    DiaryService(db).delete_entry(entry_id)

"""
Emotion goal HTTP routes.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from emolink.database import get_db
from emolink.auth import verify_api_key
from emolink.schemas import WeeklyGoalCreate, WeeklyGoalResponse
from emolink.services.goal_service import GoalService

router = APIRouter(prefix="/api/goals", tags=["goals"], dependencies=[Depends(verify_api_key)])


@router.post("", response_model=WeeklyGoalResponse, status_code=status.HTTP_201_CREATED)
def create_goal(goal: WeeklyGoalCreate, db: Session = Depends(get_db)):
    """Start a goal for one emotion, counting entries from now."""
    service = GoalService(db)
    created = service.create_goal(goal)
    return service.update_progress(created.id)


@router.get("/users/{user_id}", response_model=List[WeeklyGoalResponse])
def get_user_goals(
    user_id: str,
    completed: Optional[bool] = Query(None),
    db: Session = Depends(get_db)
):
    """List a user's goals, optionally filtered by completion."""
    return GoalService(db).get_goals(user_id, completed)


@router.post("/{goal_id}/refresh", response_model=WeeklyGoalResponse)
def refresh_goal(goal_id: int, db: Session = Depends(get_db)):
    """Recount progress and award the bonus if the goal was just completed."""
    return GoalService(db).update_progress(goal_id)


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_goal(goal_id: int, db: Session = Depends(get_db)):
    GoalService(db).delete_goal(goal_id)

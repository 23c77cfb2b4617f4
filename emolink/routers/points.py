"""
Points HTTP routes.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from emolink.database import get_db
from emolink.auth import verify_api_key
from emolink.schemas import PointsAdd, PointsResponse, PointHistoryPage
from emolink.services.points_service import PointsService

router = APIRouter(prefix="/api/points", tags=["points"], dependencies=[Depends(verify_api_key)])


@router.post("/{user_id}", response_model=PointsResponse)
def add_points(user_id: str, payload: PointsAdd, db: Session = Depends(get_db)):
    """Credit points to a user (or to the parent side of the profile)."""
    service = PointsService(db)
    if payload.parent:
        total = service.add_parent_points(user_id, payload.points)
    else:
        total = service.add_points(user_id, payload.points, payload.activity_type, payload.description)
    return {"user_id": user_id, "points": total}


@router.get("/{user_id}/history", response_model=PointHistoryPage)
def get_points_history(
    user_id: str,
    page: int = Query(0, ge=0),
    per_page: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db)
):
    """Get paginated points history (0-based pages)."""
    return PointsService(db).get_history(user_id, page, per_page)

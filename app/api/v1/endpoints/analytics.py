# backend-server/app/api/v1/endpoints/analytics.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.db import crud, session
from app.schemas import analytics as analytics_schema

router = APIRouter()

@router.get("/analytics/{user_id}", response_model=List[analytics_schema.DailyAnalytics])
def read_daily_analytics(
    user_id: int,
    range_days: int = Query(default=7, alias="range", ge=1, le=366),
    db: Session = Depends(session.get_db)
):
    """ One row per day for the last ``range`` days, oldest first. Days without data are absent. """
    return crud.get_daily_analytics(db, user_id, range_days)

@router.post("/analytics", response_model=analytics_schema.DailyAnalytics)
def upsert_daily_analytics(analytics_in: analytics_schema.DailyAnalyticsUpsert, db: Session = Depends(session.get_db)):
    """ Creates the user's row for that day or overwrites it. """
    if not crud.get_user(db, analytics_in.user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return crud.create_or_update_daily_analytics(
        db, user_id=analytics_in.user_id, day=analytics_in.date,
        focus_time=analytics_in.focus_time, flow_states=analytics_in.flow_states,
        productivity=analytics_in.productivity,
    )

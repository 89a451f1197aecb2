# backend-server/app/api/v1/endpoints/recommendations.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db import crud, session
from app.schemas import recommendation as recommendation_schema
from app.services import productivity_ai
from app.services.ai_gateway import AIGateway, get_ai_gateway

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/recommendations/{user_id}", response_model=List[recommendation_schema.Recommendation])
def list_recommendations(user_id: int, db: Session = Depends(session.get_db)):
    return crud.get_recommendations(db, user_id)

@router.put("/recommendation/{recommendation_id}", response_model=recommendation_schema.Recommendation)
def update_recommendation(
    recommendation_id: int,
    updates: recommendation_schema.RecommendationUpdate,
    db: Session = Depends(session.get_db)
):
    recommendation = crud.get_recommendation(db, recommendation_id)
    if not recommendation:
        raise HTTPException(status_code=404, detail="Recommendation not found")
    return crud.update_recommendation(db, recommendation, updates.model_dump())

@router.post("/recommendations/generate/{user_id}", response_model=List[recommendation_schema.Recommendation])
async def generate_recommendations(
    user_id: int,
    request: recommendation_schema.GenerateRecommendationsRequest,
    db: Session = Depends(session.get_db),
    gateway: AIGateway = Depends(get_ai_gateway),
):
    """
    Generates 1-3 fresh recommendations from the user's work data and stores
    every one of them; earlier recommendations are left untouched.
    """
    if not crud.get_user(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")

    work_data = request.work_data.model_dump(by_alias=True, exclude_none=True)
    drafts = await productivity_ai.generate_productivity_recommendations(gateway, work_data, provider=request.provider)

    saved = [crud.create_recommendation(db, user_id, draft.model_dump(), commit=False) for draft in drafts]
    db.commit()
    for recommendation in saved:
        db.refresh(recommendation)
    logger.info("Stored %d new recommendations for user %s", len(saved), user_id)
    return saved

# backend-server/app/schemas/recommendation.py
from datetime import datetime
from typing import Optional

from app.schemas.base import CamelModel

class Recommendation(CamelModel):
    id: int
    user_id: int
    type: str
    title: str
    description: str
    icon: str
    action_text: str
    secondary_action_text: Optional[str] = None
    is_completed: bool
    created_at: Optional[datetime] = None

class RecommendationUpdate(CamelModel):
    is_completed: bool

class WorkData(CamelModel):
    """Snapshot of the user's day handed to the recommendation prompt; unknown keys are kept."""
    class Config:
        extra = "allow"

    current_time: Optional[str] = None
    recent_focus_minutes: Optional[int] = None
    last_break: Optional[str] = None
    hydration_status: Optional[str] = None
    productivity_score: Optional[int] = None

class GenerateRecommendationsRequest(CamelModel):
    work_data: WorkData = WorkData()
    provider: str = "auto"

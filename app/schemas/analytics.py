# backend-server/app/schemas/analytics.py
import datetime as dt

from pydantic import Field

from app.schemas.base import CamelModel

class DailyAnalyticsUpsert(CamelModel):
    user_id: int
    date: dt.date
    focus_time: int = Field(default=0, ge=0)
    flow_states: int = Field(default=0, ge=0)
    productivity: int = Field(default=0, ge=0, le=100)

class DailyAnalytics(DailyAnalyticsUpsert):
    id: int

# backend-server/app/schemas/work_session.py
from datetime import datetime
from typing import Literal, Optional

from app.schemas.base import CamelModel

SessionType = Literal["focus", "break", "meeting"]

class WorkSessionStart(CamelModel):
    user_id: int
    project_id: Optional[int] = None
    type: SessionType = "focus"

class WorkSessionUpdate(CamelModel):
    notes: Optional[str] = None
    is_flow_state: Optional[bool] = None

class WorkSession(CamelModel):
    id: int
    user_id: int
    project_id: Optional[int] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: Optional[int] = None
    type: str
    notes: Optional[str] = None
    is_flow_state: bool

class ElapsedTime(CamelModel):
    hours: int
    minutes: int
    seconds: int
    total_seconds: int

class CurrentWorkSession(WorkSession):
    elapsed: ElapsedTime

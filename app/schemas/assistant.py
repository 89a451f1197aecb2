# backend-server/app/schemas/assistant.py
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from app.schemas.base import CamelModel

class AssistantMessageCreate(CamelModel):
    user_id: int
    project_id: Optional[int] = None
    content: str = Field(min_length=1)
    sender: Literal["user", "assistant"]
    provider: Optional[str] = None

class AssistantMessage(CamelModel):
    id: int
    user_id: int
    project_id: Optional[int] = None
    content: str
    sender: str
    provider: Optional[str] = None
    timestamp: datetime

class Conversation(CamelModel):
    user_message: AssistantMessage
    assistant_message: AssistantMessage

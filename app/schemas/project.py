# backend-server/app/schemas/project.py
from datetime import date, datetime
from typing import Any, List, Literal, Optional

from pydantic import Field

from app.schemas.base import CamelModel

ProjectType = Literal["video", "research", "guide", "podcast", "custom"]

class ProjectCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    type: ProjectType
    user_id: int
    description: Optional[str] = None
    deadline: Optional[date] = None
    ai_assistance_enabled: bool = False
    color_code: str
    icon: Optional[str] = None

class ProjectUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    type: Optional[ProjectType] = None
    status: Optional[str] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    deadline: Optional[date] = None
    ai_assistance_enabled: Optional[bool] = None
    color_code: Optional[str] = None
    icon: Optional[str] = None
    files: Optional[int] = Field(default=None, ge=0)
    time_logged: Optional[int] = Field(default=None, ge=0)

class Project(CamelModel):
    id: int
    name: str
    description: Optional[str] = None
    type: str
    user_id: int
    status: str
    progress: int
    deadline: Optional[date] = None
    ai_assistance_enabled: bool
    created_at: Optional[datetime] = None
    color_code: str
    icon: Optional[str] = None
    files: int
    time_logged: int

class ProjectTemplate(CamelModel):
    id: int
    name: str
    type: str
    sections: Any

class SuggestionsRequest(CamelModel):
    project_type: str = Field(min_length=1)
    project_name: str = Field(min_length=1)
    project_description: str = ""
    provider: str = "auto"

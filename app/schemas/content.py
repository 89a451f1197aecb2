# backend-server/app/schemas/content.py
from typing import Optional

from pydantic import Field

from app.schemas.base import CamelModel

class SummarizeRequest(CamelModel):
    content: str = Field(min_length=1)
    max_length: int = Field(default=500, gt=0)
    format: Optional[str] = None  # "key_points" switches to key point extraction
    max_points: int = Field(default=5, gt=0, le=20)
    provider: str = "auto"

class SummarizeResponse(CamelModel):
    summary: str

class AnalyzeRequest(CamelModel):
    content: str = Field(min_length=1)
    provider: str = "auto"

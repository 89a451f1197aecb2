# backend-server/app/api/v1/endpoints/content.py
from fastapi import APIRouter, Depends

from app.schemas import content as content_schema
from app.services import productivity_ai
from app.services.ai_gateway import AIGateway, get_ai_gateway

router = APIRouter()

@router.post("/summarize", response_model=content_schema.SummarizeResponse)
async def summarize(request: content_schema.SummarizeRequest, gateway: AIGateway = Depends(get_ai_gateway)):
    """ Summary or numbered key points; falls back to demo text when no AI vendor answers. """
    if request.format == "key_points":
        summary = await productivity_ai.extract_key_points(
            gateway, request.content, request.max_points, provider=request.provider
        )
    else:
        summary = await productivity_ai.summarize_content(
            gateway, request.content, request.max_length, provider=request.provider
        )
    return content_schema.SummarizeResponse(summary=summary)

@router.post("/analyze-content", response_model=productivity_ai.ContentAnalysis)
async def analyze(request: content_schema.AnalyzeRequest, gateway: AIGateway = Depends(get_ai_gateway)):
    return await productivity_ai.analyze_content(gateway, request.content, provider=request.provider)

# backend-server/app/api/v1/api.py
from fastapi import APIRouter
from app.api.v1.endpoints import (
    analytics, assistant, auth, content, projects, recommendations, users, work_sessions,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(users.router, tags=["Users"])
api_router.include_router(projects.router, tags=["Projects"])
api_router.include_router(work_sessions.router, tags=["Work Sessions"])
api_router.include_router(recommendations.router, tags=["Recommendations"])
api_router.include_router(assistant.router, tags=["Assistant"])
api_router.include_router(analytics.router, tags=["Analytics"])
api_router.include_router(content.router, tags=["Content"])

# backend-server/app/api/v1/endpoints/projects.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.db import crud, session
from app.schemas import project as project_schema
from app.services import productivity_ai
from app.services.ai_gateway import AIGateway, get_ai_gateway

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/projects", response_model=List[project_schema.Project])
def list_projects(user_id: int = Query(alias="userId"), db: Session = Depends(session.get_db)):
    """ Lists the projects owned by a user. """
    return crud.get_projects(db, user_id)

@router.post("/projects", response_model=project_schema.Project, status_code=status.HTTP_201_CREATED)
def create_project(project_in: project_schema.ProjectCreate, db: Session = Depends(session.get_db)):
    if not crud.get_user(db, project_in.user_id):
        raise HTTPException(status_code=404, detail="User not found")
    project = crud.create_project(db, project_in.model_dump())
    logger.info("Created project %s (%s) for user %s", project.id, project.type, project.user_id)
    return project

@router.get("/project/{project_id}", response_model=project_schema.Project)
def read_project(project_id: int, db: Session = Depends(session.get_db)):
    project = crud.get_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project

@router.put("/project/{project_id}", response_model=project_schema.Project)
def update_project(project_id: int, updates: project_schema.ProjectUpdate, db: Session = Depends(session.get_db)):
    """ Applies a partial update; fields left out of the body keep their value. """
    project = crud.get_project(db, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    update_data = updates.model_dump(exclude_unset=True)
    # Columns that are NOT NULL cannot be cleared with an explicit null
    nullable = {"description", "deadline", "icon"}
    update_data = {k: v for k, v in update_data.items() if v is not None or k in nullable}
    return crud.update_project(db, project, update_data)

@router.delete("/project/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(project_id: int, db: Session = Depends(session.get_db)):
    if not crud.delete_project(db, project_id):
        raise HTTPException(status_code=404, detail="Project not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/project-templates", response_model=List[project_schema.ProjectTemplate])
def list_project_templates(db: Session = Depends(session.get_db)):
    return crud.get_project_templates(db)

@router.get("/project-template/{template_id}", response_model=project_schema.ProjectTemplate)
def read_project_template(template_id: int, db: Session = Depends(session.get_db)):
    template = crud.get_project_template(db, template_id)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return template

@router.get("/project-template/type/{project_type}", response_model=project_schema.ProjectTemplate)
def read_project_template_by_type(project_type: str, db: Session = Depends(session.get_db)):
    template = crud.get_project_template_by_type(db, project_type)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    return template

@router.post("/project-suggestions", response_model=productivity_ai.ProjectSuggestions)
async def suggest_project_structure(
    request: project_schema.SuggestionsRequest,
    gateway: AIGateway = Depends(get_ai_gateway),
):
    """ Asks the AI gateway how to organise a new project; always answers. """
    return await productivity_ai.generate_project_suggestions(
        gateway, request.project_type, request.project_name,
        request.project_description, provider=request.provider,
    )

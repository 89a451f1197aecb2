# backend-server/app/api/v1/endpoints/assistant.py
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.db import crud, session
from app.schemas import assistant as assistant_schema
from app.services import productivity_ai
from app.services.ai_gateway import AIGateway, get_ai_gateway

router = APIRouter()

@router.get("/assistant-messages/{user_id}", response_model=List[assistant_schema.AssistantMessage])
def list_assistant_messages(
    user_id: int,
    project_id: Optional[int] = Query(default=None, alias="projectId"),
    db: Session = Depends(session.get_db)
):
    """ Oldest first. Without ``projectId`` every conversation of the user is returned. """
    return crud.get_assistant_messages(db, user_id, project_id)

@router.post(
    "/assistant-messages",
    response_model=Union[assistant_schema.Conversation, assistant_schema.AssistantMessage],
    status_code=status.HTTP_201_CREATED,
)
async def post_assistant_message(
    message_in: assistant_schema.AssistantMessageCreate,
    db: Session = Depends(session.get_db),
    gateway: AIGateway = Depends(get_ai_gateway),
):
    """
    Stores a message. A message from the user is answered right away: the
    reply is generated through the AI gateway, stored with the provider that
    produced it, and both messages are returned.
    """
    if not crud.get_user(db, message_in.user_id):
        raise HTTPException(status_code=404, detail="User not found")

    project = None
    if message_in.project_id is not None:
        project = crud.get_project(db, message_in.project_id)
        if not project or project.user_id != message_in.user_id:
            raise HTTPException(status_code=404, detail="Project not found")

    if message_in.sender == "assistant":
        return crud.create_assistant_message(
            db, user_id=message_in.user_id, project_id=message_in.project_id,
            content=message_in.content, sender="assistant", provider=message_in.provider,
        )

    user_message = crud.create_assistant_message(
        db, user_id=message_in.user_id, project_id=message_in.project_id,
        content=message_in.content, sender="user",
    )

    context = ""
    if project:
        context = f"Project: {project.name}, Type: {project.type}, Description: {project.description or ''}"
    completion = await productivity_ai.generate_assistant_response(
        gateway, message_in.content, context, provider=message_in.provider or "auto"
    )

    assistant_message = crud.create_assistant_message(
        db, user_id=message_in.user_id, project_id=message_in.project_id,
        content=completion.text, sender="assistant", provider=completion.provider.value,
    )
    return assistant_schema.Conversation(
        user_message=assistant_schema.AssistantMessage.model_validate(user_message),
        assistant_message=assistant_schema.AssistantMessage.model_validate(assistant_message),
    )

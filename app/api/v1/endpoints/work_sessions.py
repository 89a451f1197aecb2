# backend-server/app/api/v1/endpoints/work_sessions.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.db import crud, session
from app.schemas import work_session as session_schema
from app.services import work_sessions

router = APIRouter()

@router.get("/work-sessions/{user_id}", response_model=List[session_schema.WorkSession])
def list_work_sessions(user_id: int, db: Session = Depends(session.get_db)):
    return crud.get_work_sessions(db, user_id)

@router.get("/work-sessions/project/{project_id}", response_model=List[session_schema.WorkSession])
def list_project_work_sessions(project_id: int, db: Session = Depends(session.get_db)):
    return crud.get_work_sessions_by_project(db, project_id)

@router.get("/work-session/current/{user_id}", response_model=session_schema.CurrentWorkSession)
def read_current_work_session(user_id: int, db: Session = Depends(session.get_db)):
    """ The user's active session with its elapsed time, or 404 when the user is idle. """
    current = crud.get_current_work_session(db, user_id)
    if not current:
        raise HTTPException(status_code=404, detail="No active work session found")
    data = session_schema.WorkSession.model_validate(current).model_dump()
    return session_schema.CurrentWorkSession(**data, elapsed=work_sessions.elapsed(current))

@router.post("/work-sessions", response_model=session_schema.WorkSession, status_code=status.HTTP_201_CREATED)
def start_work_session(session_in: session_schema.WorkSessionStart, db: Session = Depends(session.get_db)):
    """ Starts a session, ending the user's previous active session first. """
    if not crud.get_user(db, session_in.user_id):
        raise HTTPException(status_code=404, detail="User not found")
    if session_in.project_id is not None:
        project = crud.get_project(db, session_in.project_id)
        if not project or project.user_id != session_in.user_id:
            raise HTTPException(status_code=404, detail="Project not found")
    try:
        return work_sessions.start_session(db, session_in.user_id, session_in.project_id, session_in.type)
    except work_sessions.ActiveSessionConflict:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Another work session was started at the same time. Please retry."
        )

@router.put("/work-session/{session_id}", response_model=session_schema.WorkSession)
def update_work_session(session_id: int, updates: session_schema.WorkSessionUpdate, db: Session = Depends(session.get_db)):
    """ Records notes or the flow-state flag on a session. """
    try:
        return work_sessions.update_session(db, session_id, updates.model_dump(exclude_unset=True, exclude_none=True))
    except work_sessions.WorkSessionNotFound:
        raise HTTPException(status_code=404, detail="Work session not found")

@router.post("/work-session/{session_id}/end", response_model=session_schema.WorkSession)
def end_work_session(session_id: int, db: Session = Depends(session.get_db)):
    try:
        return work_sessions.end_session(db, session_id)
    except work_sessions.WorkSessionNotFound:
        raise HTTPException(status_code=404, detail="Work session not found")
    except work_sessions.WorkSessionAlreadyEnded:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Work session has already ended")

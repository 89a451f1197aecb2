# backend-server/app/db/crud.py
# Storage functions shared by the endpoints and services. Callers own the
# transaction unless a function commits explicitly.
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from app.db import models


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# --- Users ---
def get_user(db: Session, user_id: int) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.id == user_id).first()

def get_user_by_username(db: Session, username: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.username == username).first()

def create_user(db: Session, *, username: str, hashed_password: str, email: str, name: str,
                avatar: Optional[str] = None) -> models.User:
    db_user = models.User(
        username=username, hashed_password=hashed_password,
        email=email, name=name, avatar=avatar,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


# --- Projects ---
def get_projects(db: Session, user_id: int) -> List[models.Project]:
    return db.query(models.Project).filter(models.Project.user_id == user_id).order_by(models.Project.id).all()

def get_project(db: Session, project_id: int) -> Optional[models.Project]:
    return db.query(models.Project).filter(models.Project.id == project_id).first()

def create_project(db: Session, data: dict) -> models.Project:
    db_project = models.Project(**data)
    db.add(db_project)
    db.commit()
    db.refresh(db_project)
    return db_project

def update_project(db: Session, db_project: models.Project, data: dict) -> models.Project:
    for field, value in data.items():
        setattr(db_project, field, value)
    db.commit()
    db.refresh(db_project)
    return db_project

def delete_project(db: Session, project_id: int) -> bool:
    db_project = get_project(db, project_id)
    if not db_project:
        return False
    # Sessions and conversations outlive the project they were attached to
    db.query(models.WorkSession).filter(models.WorkSession.project_id == project_id).update(
        {models.WorkSession.project_id: None}, synchronize_session=False)
    db.query(models.AssistantMessage).filter(models.AssistantMessage.project_id == project_id).update(
        {models.AssistantMessage.project_id: None}, synchronize_session=False)
    db.delete(db_project)
    db.commit()
    return True

def add_time_logged(db: Session, project_id: int, minutes: int) -> None:
    """Atomically credits ``minutes`` to a project without a read-modify-write round trip."""
    db.query(models.Project).filter(models.Project.id == project_id).update(
        {models.Project.time_logged: models.Project.time_logged + minutes},
        synchronize_session=False,
    )


# --- Project templates ---
def get_project_templates(db: Session) -> List[models.ProjectTemplate]:
    return db.query(models.ProjectTemplate).order_by(models.ProjectTemplate.id).all()

def get_project_template(db: Session, template_id: int) -> Optional[models.ProjectTemplate]:
    return db.query(models.ProjectTemplate).filter(models.ProjectTemplate.id == template_id).first()

def get_project_template_by_type(db: Session, type_: str) -> Optional[models.ProjectTemplate]:
    return db.query(models.ProjectTemplate).filter(models.ProjectTemplate.type == type_).first()

def create_project_template(db: Session, *, name: str, type_: str, sections) -> models.ProjectTemplate:
    template = models.ProjectTemplate(name=name, type=type_, sections=sections)
    db.add(template)
    db.commit()
    db.refresh(template)
    return template


# --- Work sessions ---
def get_work_sessions(db: Session, user_id: int) -> List[models.WorkSession]:
    return db.query(models.WorkSession).filter(
        models.WorkSession.user_id == user_id
    ).order_by(models.WorkSession.start_time).all()

def get_work_sessions_by_project(db: Session, project_id: int) -> List[models.WorkSession]:
    return db.query(models.WorkSession).filter(
        models.WorkSession.project_id == project_id
    ).order_by(models.WorkSession.start_time).all()

def get_work_session(db: Session, session_id: int) -> Optional[models.WorkSession]:
    return db.query(models.WorkSession).filter(models.WorkSession.id == session_id).first()

def get_current_work_session(db: Session, user_id: int) -> Optional[models.WorkSession]:
    return db.query(models.WorkSession).filter(
        models.WorkSession.user_id == user_id,
        models.WorkSession.end_time.is_(None),
    ).order_by(models.WorkSession.start_time.desc()).first()


# --- Recommendations ---
def get_recommendations(db: Session, user_id: int) -> List[models.Recommendation]:
    return db.query(models.Recommendation).filter(
        models.Recommendation.user_id == user_id
    ).order_by(models.Recommendation.id).all()

def get_recommendation(db: Session, recommendation_id: int) -> Optional[models.Recommendation]:
    return db.query(models.Recommendation).filter(models.Recommendation.id == recommendation_id).first()

def create_recommendation(db: Session, user_id: int, data: dict, commit: bool = True) -> models.Recommendation:
    recommendation = models.Recommendation(user_id=user_id, is_completed=False, created_at=utcnow(), **data)
    db.add(recommendation)
    if commit:
        db.commit()
        db.refresh(recommendation)
    return recommendation

def update_recommendation(db: Session, recommendation: models.Recommendation, data: dict) -> models.Recommendation:
    for field, value in data.items():
        setattr(recommendation, field, value)
    db.commit()
    db.refresh(recommendation)
    return recommendation


# --- Assistant messages ---
def get_assistant_messages(db: Session, user_id: int, project_id: Optional[int] = None) -> List[models.AssistantMessage]:
    query = db.query(models.AssistantMessage).filter(models.AssistantMessage.user_id == user_id)
    if project_id is not None:
        query = query.filter(models.AssistantMessage.project_id == project_id)
    return query.order_by(models.AssistantMessage.timestamp, models.AssistantMessage.id).all()

def create_assistant_message(db: Session, *, user_id: int, content: str, sender: str,
                             project_id: Optional[int] = None, provider: Optional[str] = None) -> models.AssistantMessage:
    message = models.AssistantMessage(
        user_id=user_id, project_id=project_id, content=content,
        sender=sender, provider=provider, timestamp=utcnow(),
    )
    db.add(message)
    db.commit()
    db.refresh(message)
    return message


# --- Daily analytics ---
def get_daily_analytics(db: Session, user_id: int, range_days: int = 7, today: Optional[date] = None) -> List[models.DailyAnalytics]:
    """Rows for the last ``range_days`` calendar days, today included, oldest first."""
    today = today or utcnow().date()
    start = today - timedelta(days=range_days - 1)
    return db.query(models.DailyAnalytics).filter(
        models.DailyAnalytics.user_id == user_id,
        models.DailyAnalytics.date >= start,
        models.DailyAnalytics.date <= today,
    ).order_by(models.DailyAnalytics.date).all()

def create_or_update_daily_analytics(db: Session, *, user_id: int, day: date, focus_time: int = 0,
                                     flow_states: int = 0, productivity: int = 0) -> models.DailyAnalytics:
    analytics = db.query(models.DailyAnalytics).filter(
        models.DailyAnalytics.user_id == user_id,
        models.DailyAnalytics.date == day,
    ).first()
    if analytics is None:
        analytics = models.DailyAnalytics(user_id=user_id, date=day)
        db.add(analytics)
    analytics.focus_time = focus_time
    analytics.flow_states = flow_states
    analytics.productivity = productivity
    db.commit()
    db.refresh(analytics)
    return analytics

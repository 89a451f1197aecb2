# backend-server/app/services/work_sessions.py
"""
Work-session lifecycle: a user is either idle or has exactly one active
session (``end_time IS NULL``). The database backs the rule with a unique
partial index; ``start_session`` ends any active session before inserting
and retries once if a concurrent start slipped in between.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.db import crud, models

logger = logging.getLogger(__name__)

START_ATTEMPTS = 5


class WorkSessionNotFound(Exception):
    pass

class WorkSessionAlreadyEnded(Exception):
    pass

class ActiveSessionConflict(Exception):
    pass


def _as_utc(moment: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored as UTC
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)

def minutes_between(start: datetime, end: datetime) -> int:
    seconds = (_as_utc(end) - _as_utc(start)).total_seconds()
    return max(int(seconds // 60), 0)

def elapsed(session: models.WorkSession, now: Optional[datetime] = None) -> dict:
    """Hours/minutes/seconds since the session started (up to its end if it has one)."""
    until = session.end_time or now or crud.utcnow()
    total = max(int((_as_utc(until) - _as_utc(session.start_time)).total_seconds()), 0)
    return {
        "hours": total // 3600,
        "minutes": (total % 3600) // 60,
        "seconds": total % 60,
        "total_seconds": total,
    }


def _close(db: Session, session: models.WorkSession, now: datetime) -> None:
    session.end_time = now
    session.duration = minutes_between(session.start_time, now)
    if session.project_id is not None:
        crud.add_time_logged(db, session.project_id, session.duration)


def end_session(db: Session, session_id: int, now: Optional[datetime] = None) -> models.WorkSession:
    session = crud.get_work_session(db, session_id)
    if session is None:
        raise WorkSessionNotFound(session_id)
    if session.end_time is not None:
        raise WorkSessionAlreadyEnded(session_id)
    _close(db, session, now or crud.utcnow())
    db.commit()
    db.refresh(session)
    logger.info("Ended work session %s for user %s after %s min", session.id, session.user_id, session.duration)
    return session


def start_session(db: Session, user_id: int, project_id: Optional[int] = None, type_: str = "focus",
                  now: Optional[datetime] = None) -> models.WorkSession:
    for attempt in range(1, START_ATTEMPTS + 1):
        moment = now or crud.utcnow()
        current = crud.get_current_work_session(db, user_id)
        if current is not None:
            logger.info("Auto-ending active work session %s for user %s", current.id, user_id)
            _close(db, current, moment)
            db.flush()
        session = models.WorkSession(
            user_id=user_id, project_id=project_id, start_time=moment,
            type=type_, is_flow_state=False,
        )
        db.add(session)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning("Concurrent work session start for user %s (attempt %d)", user_id, attempt)
            continue
        db.refresh(session)
        return session
    raise ActiveSessionConflict(user_id)


def update_session(db: Session, session_id: int, data: dict) -> models.WorkSession:
    session = crud.get_work_session(db, session_id)
    if session is None:
        raise WorkSessionNotFound(session_id)
    for field, value in data.items():
        setattr(session, field, value)
    db.commit()
    db.refresh(session)
    return session

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import IntegrityError

from app.db import crud, models
from app.services import work_sessions

T0 = datetime(2026, 10, 18, 9, 0, 0, tzinfo=timezone.utc)


def active_sessions(db, user_id):
    db.expire_all()
    return db.query(models.WorkSession).filter(
        models.WorkSession.user_id == user_id, models.WorkSession.end_time.is_(None)
    ).all()


def test_start_from_idle_creates_active_session(db, user, project):
    session = work_sessions.start_session(db, user.id, project.id, "focus", now=T0)
    assert session.end_time is None
    assert session.duration is None
    assert session.project_id == project.id
    assert crud.get_current_work_session(db, user.id).id == session.id


def test_start_while_active_ends_previous_session(db, user, project, other_project):
    first = work_sessions.start_session(db, user.id, project.id, "focus", now=T0)
    second = work_sessions.start_session(db, user.id, other_project.id, "focus",
                                         now=T0 + timedelta(minutes=25, seconds=59))

    db.expire_all()
    first = crud.get_work_session(db, first.id)
    assert first.end_time is not None
    assert first.duration == 25
    assert second.end_time is None
    assert second.project_id == other_project.id
    assert [s.id for s in active_sessions(db, user.id)] == [second.id]
    assert crud.get_project(db, project.id).time_logged == 25
    assert crud.get_project(db, other_project.id).time_logged == 0


def test_end_credits_exact_duration_to_project(db, user, project):
    crud.update_project(db, project, {"time_logged": 10})
    session = work_sessions.start_session(db, user.id, project.id, "focus", now=T0)

    ended = work_sessions.end_session(db, session.id, now=T0 + timedelta(minutes=42, seconds=30))
    assert ended.duration == 42
    db.expire_all()
    assert crud.get_project(db, project.id).time_logged == 52
    assert crud.get_current_work_session(db, user.id) is None


def test_end_without_project_leaves_projects_untouched(db, user, project, other_project):
    session = work_sessions.start_session(db, user.id, None, "break", now=T0)
    ended = work_sessions.end_session(db, session.id, now=T0 + timedelta(minutes=15))
    assert ended.duration == 15
    db.expire_all()
    assert [p.time_logged for p in crud.get_projects(db, user.id)] == [0, 0]


def test_duration_is_floored_and_never_negative():
    start = datetime(2026, 1, 1, 12, 0, 0)
    assert work_sessions.minutes_between(start, start + timedelta(seconds=59)) == 0
    assert work_sessions.minutes_between(start, start + timedelta(minutes=3, seconds=1)) == 3
    assert work_sessions.minutes_between(start, start - timedelta(minutes=1)) == 0
    # naive values are read as UTC
    assert work_sessions.minutes_between(start, (start + timedelta(minutes=5)).replace(tzinfo=timezone.utc)) == 5


def test_end_unknown_session(db):
    with pytest.raises(work_sessions.WorkSessionNotFound):
        work_sessions.end_session(db, 999)


def test_end_twice_is_rejected(db, user):
    session = work_sessions.start_session(db, user.id, None, "focus", now=T0)
    work_sessions.end_session(db, session.id, now=T0 + timedelta(minutes=1))
    with pytest.raises(work_sessions.WorkSessionAlreadyEnded):
        work_sessions.end_session(db, session.id)


def test_database_refuses_second_active_session(db, user):
    db.add(models.WorkSession(user_id=user.id, start_time=T0, type="focus"))
    db.commit()
    db.add(models.WorkSession(user_id=user.id, start_time=T0, type="focus"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
    assert len(active_sessions(db, user.id)) == 1


def test_ended_sessions_do_not_count_towards_the_limit(db, user):
    for minute in range(3):
        session = work_sessions.start_session(db, user.id, None, "focus", now=T0 + timedelta(minutes=minute))
    work_sessions.end_session(db, session.id, now=T0 + timedelta(minutes=10))
    assert len(crud.get_work_sessions(db, user.id)) == 3
    assert active_sessions(db, user.id) == []


def test_start_retries_when_a_concurrent_start_wins(db, user, session_factory, monkeypatch):
    real_lookup = crud.get_current_work_session
    calls = {"n": 0}

    def racing_lookup(session, user_id):
        calls["n"] += 1
        if calls["n"] == 1:
            # Another request inserts its active session right after our check
            other = session_factory()
            other.add(models.WorkSession(user_id=user_id, start_time=T0, type="meeting"))
            other.commit()
            other.close()
            return None
        return real_lookup(session, user_id)

    monkeypatch.setattr(work_sessions.crud, "get_current_work_session", racing_lookup)
    session = work_sessions.start_session(db, user.id, None, "focus", now=T0 + timedelta(minutes=5))

    assert calls["n"] == 2
    active = active_sessions(db, user.id)
    assert [s.id for s in active] == [session.id]
    meeting = db.query(models.WorkSession).filter(models.WorkSession.type == "meeting").one()
    assert meeting.duration == 5


def test_start_gives_up_after_repeated_conflicts(db, user, monkeypatch):
    db.add(models.WorkSession(user_id=user.id, start_time=T0, type="focus"))
    db.commit()
    monkeypatch.setattr(work_sessions.crud, "get_current_work_session", lambda session, user_id: None)
    with pytest.raises(work_sessions.ActiveSessionConflict):
        work_sessions.start_session(db, user.id, None, "focus")


def test_start_survives_several_lost_races(db, user, monkeypatch):
    db.add(models.WorkSession(user_id=user.id, start_time=T0, type="meeting"))
    db.commit()
    real_lookup = crud.get_current_work_session
    calls = {"n": 0}

    def stale_lookup(session, user_id):
        calls["n"] += 1
        # the first lookups miss the session another request just started
        return None if calls["n"] < work_sessions.START_ATTEMPTS else real_lookup(session, user_id)

    monkeypatch.setattr(work_sessions.crud, "get_current_work_session", stale_lookup)
    session = work_sessions.start_session(db, user.id, None, "focus", now=T0 + timedelta(minutes=3))

    assert calls["n"] == work_sessions.START_ATTEMPTS > 2
    assert [s.id for s in active_sessions(db, user.id)] == [session.id]


def test_elapsed_is_derived_from_start_time():
    session = models.WorkSession(start_time=T0.replace(tzinfo=None), end_time=None)
    result = work_sessions.elapsed(session, now=T0 + timedelta(hours=1, minutes=2, seconds=3))
    assert result == {"hours": 1, "minutes": 2, "seconds": 3, "total_seconds": 3723}


def test_update_session_records_flow_state(db, user):
    session = work_sessions.start_session(db, user.id, None, "focus", now=T0)
    updated = work_sessions.update_session(db, session.id, {"is_flow_state": True, "notes": "deep work"})
    assert updated.is_flow_state is True
    assert updated.notes == "deep work"

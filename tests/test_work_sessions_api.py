from datetime import datetime, timedelta, timezone

from app.db import crud, models


def start(client, user_id, project_id=None, type_="focus"):
    return client.post("/api/v1/work-sessions", json={"userId": user_id, "projectId": project_id, "type": type_})


def backdate(db, session_id, minutes):
    row = crud.get_work_session(db, session_id)
    row.start_time = datetime.now(timezone.utc) - timedelta(minutes=minutes, seconds=10)
    db.commit()


def test_current_session_404_when_idle(client, user):
    assert client.get(f"/api/v1/work-session/current/{user.id}").status_code == 404


def test_switching_projects_ends_previous_session(client, db, user, project, other_project):
    first = start(client, user.id, project.id)
    assert first.status_code == 201
    assert first.json()["endTime"] is None
    backdate(db, first.json()["id"], 30)

    second = start(client, user.id, other_project.id)
    assert second.status_code == 201
    assert second.json()["projectId"] == other_project.id

    sessions = {s["id"]: s for s in client.get(f"/api/v1/work-sessions/{user.id}").json()}
    ended = sessions[first.json()["id"]]
    assert ended["endTime"] is not None
    assert ended["duration"] == 30
    assert client.get(f"/api/v1/project/{project.id}").json()["timeLogged"] == 30

    current = client.get(f"/api/v1/work-session/current/{user.id}").json()
    assert current["id"] == second.json()["id"]


def test_current_session_reports_elapsed_time(client, db, user):
    session_id = start(client, user.id).json()["id"]
    backdate(db, session_id, 61)
    current = client.get(f"/api/v1/work-session/current/{user.id}").json()
    assert current["elapsed"]["hours"] == 1
    assert current["elapsed"]["minutes"] == 1
    assert current["elapsed"]["totalSeconds"] >= 3670
    # elapsed time is never written back
    assert current["duration"] is None


def test_end_session(client, db, user, project):
    session_id = start(client, user.id, project.id).json()["id"]
    backdate(db, session_id, 12)

    response = client.post(f"/api/v1/work-session/{session_id}/end")
    assert response.status_code == 200
    assert response.json()["duration"] == 12
    assert client.get(f"/api/v1/project/{project.id}").json()["timeLogged"] == 12
    assert client.get(f"/api/v1/work-session/current/{user.id}").status_code == 404

    assert client.post(f"/api/v1/work-session/{session_id}/end").status_code == 409
    assert client.post("/api/v1/work-session/999/end").status_code == 404


def test_start_validates_input(client, user):
    assert start(client, user.id, type_="nap").status_code == 400
    assert start(client, 999).status_code == 404
    assert start(client, user.id, project_id=999).status_code == 404


def test_sessions_by_project(client, user, project, other_project):
    start(client, user.id, project.id)
    start(client, user.id, other_project.id)
    start(client, user.id, project.id)
    assert len(client.get(f"/api/v1/work-sessions/project/{project.id}").json()) == 2
    assert len(client.get(f"/api/v1/work-sessions/project/{other_project.id}").json()) == 1


def test_only_one_active_session_after_many_starts(client, db, user):
    for _ in range(5):
        start(client, user.id)
    db.expire_all()
    active = db.query(models.WorkSession).filter(
        models.WorkSession.user_id == user.id, models.WorkSession.end_time.is_(None)
    ).count()
    assert active == 1


def test_update_session_notes(client, user):
    session_id = start(client, user.id).json()["id"]
    response = client.put(f"/api/v1/work-session/{session_id}", json={"notes": "wrote intro", "isFlowState": True})
    assert response.status_code == 200
    assert response.json()["notes"] == "wrote intro"
    assert response.json()["isFlowState"] is True
    assert client.put("/api/v1/work-session/999", json={"notes": "x"}).status_code == 404


def test_cannot_start_session_on_another_users_project(client, db, user, project, stranger):
    response = start(client, stranger.id, project.id)
    assert response.status_code == 404
    assert crud.get_current_work_session(db, stranger.id) is None
    assert crud.get_project(db, project.id).time_logged == 0

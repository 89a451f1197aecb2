def register(client, **overrides):
    body = {"username": "grace", "password": "hopper-123", "email": "grace@example.com", "name": "Grace Hopper"}
    body.update(overrides)
    return client.post("/api/v1/auth/register", json=body)


def test_register_returns_user_without_password(client):
    response = register(client)
    assert response.status_code == 201
    data = response.json()
    assert data["username"] == "grace"
    assert data["avatar"] is None
    assert "password" not in data
    assert "hashedPassword" not in data


def test_register_stores_a_hash_not_the_password(client, db):
    register(client)
    from app.db import crud
    stored = crud.get_user_by_username(db, "grace").hashed_password
    assert stored != "hopper-123"
    assert stored.startswith("$argon2")


def test_register_duplicate_username_conflicts(client):
    assert register(client).status_code == 201
    response = register(client, email="other@example.com")
    assert response.status_code == 409


def test_register_validation_errors_are_400(client):
    response = register(client, email="not-an-email", password="x")
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Invalid request data"
    assert {tuple(e["loc"])[-1] for e in body["errors"]} >= {"email", "password"}


def test_login_success_returns_user_and_token(client):
    register(client)
    response = client.post("/api/v1/auth/login", json={"username": "grace", "password": "hopper-123"})
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Grace Hopper"
    assert data["tokenType"] == "bearer"
    assert "password" not in data

    me = client.get("/api/v1/users/me", headers={"Authorization": f"Bearer {data['accessToken']}"})
    assert me.status_code == 200
    assert me.json()["username"] == "grace"


def test_login_wrong_password(client):
    register(client)
    response = client.post("/api/v1/auth/login", json={"username": "grace", "password": "wrong"})
    assert response.status_code == 401


def test_login_unknown_user(client):
    response = client.post("/api/v1/auth/login", json={"username": "nobody", "password": "whatever"})
    assert response.status_code == 401


def test_login_missing_fields(client):
    assert client.post("/api/v1/auth/login", json={"username": "grace"}).status_code == 400


def test_me_requires_token(client):
    assert client.get("/api/v1/users/me").status_code == 401
    assert client.get("/api/v1/users/me", headers={"Authorization": "Bearer junk"}).status_code == 401


def test_change_password(client):
    register(client)
    token = client.post("/api/v1/auth/login", json={"username": "grace", "password": "hopper-123"}).json()["accessToken"]
    headers = {"Authorization": f"Bearer {token}"}

    wrong = client.put("/api/v1/users/me/password", json={"currentPassword": "nope", "newPassword": "cobol-1959"}, headers=headers)
    assert wrong.status_code == 400
    ok = client.put("/api/v1/users/me/password", json={"currentPassword": "hopper-123", "newPassword": "cobol-1959"}, headers=headers)
    assert ok.status_code == 204
    assert client.post("/api/v1/auth/login", json={"username": "grace", "password": "cobol-1959"}).status_code == 200


def test_read_user(client, user):
    assert client.get(f"/api/v1/user/{user.id}").json()["email"] == "ada@example.com"
    assert client.get("/api/v1/user/999").status_code == 404

import os

# Configure before the app (and its Settings) is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_DEFAULT_DATA"] = "false"
for key in ("GEMINI_API_KEY", "ANTHROPIC_API_KEY", "DEEPSEEK_API_KEY"):
    os.environ[key] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core import security
from app.db import crud, models, session as db_session
from app.main import app
from app.services.ai_gateway import AIConfig, AIGateway, get_ai_gateway


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    models.Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture
def gateway():
    # No credentials: every AI call is answered from the fallbacks
    return AIGateway(AIConfig())


@pytest.fixture
def client(session_factory, gateway):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[db_session.get_db] = override_get_db
    app.dependency_overrides[get_ai_gateway] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def user(db):
    return crud.create_user(
        db, username="ada", hashed_password=security.get_password_hash("s3cret-pass"),
        email="ada@example.com", name="Ada Lovelace",
    )


@pytest.fixture
def project(db, user):
    return crud.create_project(db, {
        "name": "Launch video", "type": "video", "user_id": user.id, "color_code": "#4f46e5",
    })


@pytest.fixture
def other_project(db, user):
    return crud.create_project(db, {
        "name": "Sleep research", "type": "research", "user_id": user.id, "color_code": "#16a34a",
    })


@pytest.fixture
def stranger(db):
    return crud.create_user(
        db, username="mallory", hashed_password=security.get_password_hash("not-ada-1"),
        email="mallory@example.com", name="Mallory",
    )

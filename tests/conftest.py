import os

# Must be set before eduai.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENROUTER_API_KEY"] = ""
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["ALLOW_ADMIN_SIGNUP"] = "true"

import pytest
from fastapi.testclient import TestClient

from eduai import models  # noqa
from eduai.db.base import Base
from eduai.db.session import SessionLocal, engine
from eduai.main import app
from eduai.services import content_service
from tests.utils import auth_headers, login, register


@pytest.fixture(scope="function")
def db_session():
    """Fresh in-memory schema per test."""
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    # not used as a context manager: the lifespan would create tables again
    return TestClient(app)


@pytest.fixture
def admin(client):
    """Admin account: (profile, headers)."""
    profile = register(client, "admin@eduai.com", role="admin", full_name="Ada Admin")
    token = login(client, "admin@eduai.com")["access_token"]
    return profile, auth_headers(token)


@pytest.fixture
def lecturer(client):
    profile = register(client, "lena@example.com", full_name="Lena Lecturer")
    token = login(client, "lena@example.com")["access_token"]
    return profile, auth_headers(token)


@pytest.fixture
def other_lecturer(client):
    profile = register(client, "otto@example.com", full_name="Otto Lecturer")
    token = login(client, "otto@example.com")["access_token"]
    return profile, auth_headers(token)


@pytest.fixture
def course(client, admin):
    _, headers = admin
    response = client.post(
        "/api/v1/courses/",
        json={
            "title": "Introduction to Databases",
            "code": "CS340",
            "description": "Relational modelling and SQL",
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def assigned_course(client, admin, lecturer, course):
    _, headers = admin
    lecturer_profile, _ = lecturer
    response = client.post(
        "/api/v1/assignments/",
        json={"course_id": course["id"], "lecturer_id": lecturer_profile["id"]},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return course


@pytest.fixture
def fake_llm(monkeypatch):
    """Replace the inference call; records (prompt, content_type) pairs."""
    calls = []

    def _generate(prompt, content_type="lesson"):
        calls.append((prompt, content_type))
        return f"# {content_type.title()}\n\nGenerated for: {prompt}"

    monkeypatch.setattr(content_service, "generate_course_content", _generate)
    return calls

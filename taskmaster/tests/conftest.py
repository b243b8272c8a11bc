"""Shared fixtures: an in-memory database and a client bound to it."""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel, create_engine
from sqlmodel.pool import StaticPool

from taskmaster.database import get_session
from taskmaster.main import app


@pytest.fixture(name="engine")
def engine_fixture():
    """Create a fresh in-memory database for each test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(engine):
    """Create a test client whose requests each get their own session."""
    def get_session_override():
        with Session(engine, expire_on_commit=False) as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


@pytest.fixture(name="make_project")
def make_project_fixture(client: TestClient):
    def make(title="Project", **fields):
        response = client.post("/api/projects", json={"title": title, **fields})
        assert response.status_code == 201, response.text
        return response.json()

    return make


@pytest.fixture(name="make_task")
def make_task_fixture(client: TestClient):
    def make(title="Task", due_date="2024-07-01", **fields):
        response = client.post(
            "/api/tasks", json={"title": title, "dueDate": due_date, **fields}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return make

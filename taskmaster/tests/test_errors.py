"""Tests for the error envelope rendered by every failing request."""

from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError

from taskmaster.errors import ApiError, ErrorKind, invalid_input, not_found
from taskmaster.main import app
from taskmaster.routes import projects


def test_error_envelope_shape():
    """Errors render as the kind/code/message envelope."""
    error = invalid_input("INVALID_STATUS", "Invalid status", status="done")
    assert error.status_code == 400
    assert error.to_dict() == {
        "kind": "invalid_input",
        "code": "INVALID_STATUS",
        "message": "Invalid status",
        "error": "Invalid status",
        "details": {"status": "done"},
    }

    missing = not_found("Task", 3)
    assert missing.status_code == 404
    assert missing.to_dict()["message"] == "Task not found"
    assert missing.to_dict()["details"] == {"id": 3}

    assert ApiError(ErrorKind.conflict, "CONFLICT", "x").status_code == 409


def test_unexpected_errors_are_redacted(client: TestClient, monkeypatch):
    """Unexpected exceptions become a 500 without their message."""
    def explode(session, project_ids):
        raise RuntimeError("secret connection string")

    monkeypatch.setattr(projects, "project_counts", explode)
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/projects")
    assert response.status_code == 500
    error = response.json()
    assert error["kind"] == "internal"
    assert error["code"] == "INTERNAL_ERROR"
    assert "secret" not in response.text


def test_integrity_errors_are_conflicts(client: TestClient, monkeypatch):
    """Integrity errors become a 409 conflict."""
    def conflict(session, project_ids):
        raise IntegrityError("INSERT ...", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(projects, "project_counts", conflict)

    response = client.get("/api/projects")
    assert response.status_code == 409
    assert response.json()["kind"] == "conflict"
    assert response.json()["code"] == "CONFLICT"


def test_health_check(client: TestClient):
    """Test the health check endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

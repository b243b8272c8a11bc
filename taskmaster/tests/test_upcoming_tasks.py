"""Tests for upcoming task CRUD."""

from fastapi.testclient import TestClient


def _create(client: TestClient, **body):
    response = client.post("/api/upcoming-tasks", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_create_upcoming_task(client: TestClient, make_project):
    """Test creating an upcoming task with default priority."""
    project = make_project()
    data = _create(
        client, title="Kickoff meeting", projectId=project["id"], dueDate="2024-06-03"
    )
    assert data["title"] == "Kickoff meeting"
    assert data["priority"] == "medium"
    assert data["projectId"] == project["id"]
    assert data["dueDate"] == "2024-06-03"


def test_create_upcoming_task_validation(client: TestClient):
    """Test title, priority and project validation on create."""
    response = client.post("/api/upcoming-tasks", json={"description": "no title"})
    assert response.status_code == 400
    assert response.json()["code"] == "MISSING_REQUIRED_FIELD"

    response = client.post("/api/upcoming-tasks", json={"title": "x", "priority": "asap"})
    assert response.json()["code"] == "INVALID_PRIORITY"

    response = client.post("/api/upcoming-tasks", json={"title": "x", "projectId": 31})
    assert response.json()["code"] == "PROJECT_NOT_FOUND"


def test_list_orders_by_due_date(client: TestClient):
    """Test that upcoming tasks list soonest first."""
    _create(client, title="later", dueDate="2024-09-01")
    _create(client, title="sooner", dueDate="2024-06-01")
    _create(client, title="middle", dueDate="2024-07-15")

    titles = [t["title"] for t in client.get("/api/upcoming-tasks").json()]
    assert titles == ["sooner", "middle", "later"]


def test_list_filters(client: TestClient, make_project):
    """Test filtering by project and priority."""
    project = make_project()
    _create(client, title="a", projectId=project["id"], priority="high")
    _create(client, title="b", projectId=project["id"], priority="low")
    _create(client, title="c", priority="high")

    found = client.get(f"/api/upcoming-tasks?projectId={project['id']}&priority=high").json()
    assert [t["title"] for t in found] == ["a"]


def test_update_upcoming_task(client: TestClient, make_project):
    """Test a partial update, including projectId validation."""
    task = _create(client, title="Draft", priority="low")
    project = make_project()

    response = client.put(
        f"/api/upcoming-tasks?id={task['id']}",
        json={"priority": "high", "projectId": project["id"]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["priority"] == "high"
    assert data["projectId"] == project["id"]
    assert data["title"] == "Draft"

    response = client.put(f"/api/upcoming-tasks?id={task['id']}", json={"projectId": "x"})
    assert response.json()["code"] == "INVALID_PROJECT_ID"


def test_delete_upcoming_task(client: TestClient):
    """Test deleting an upcoming task."""
    task = _create(client, title="Gone soon")

    response = client.delete(f"/api/upcoming-tasks?id={task['id']}")
    assert response.status_code == 200
    assert response.json()["message"] == "Upcoming task deleted successfully"
    assert response.json()["task"]["id"] == task["id"]

    response = client.get(f"/api/upcoming-tasks?id={task['id']}")
    assert response.status_code == 404
    assert response.json()["message"] == "Upcoming task not found"


def test_update_with_missing_project_leaves_row_unchanged(client: TestClient, make_project):
    """Re-pointing an upcoming task at a project that does not exist is rejected."""
    project = make_project()
    task = _create(client, title="Keep me", projectId=project["id"])

    response = client.put(f"/api/upcoming-tasks?id={task['id']}", json={"projectId": 999})
    assert response.status_code == 400
    assert response.json()["code"] == "PROJECT_NOT_FOUND"

    assert client.get(f"/api/upcoming-tasks?id={task['id']}").json() == task

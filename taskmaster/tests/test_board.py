"""Tests for the kanban board view, task stats and the status vocabulary."""

from fastapi.testclient import TestClient

from taskmaster.vocabulary import TaskStatus, column_for_status, status_for_column


def test_column_mapping():
    """Statuses map to board columns and back, with fallbacks."""
    assert column_for_status("backlog") == "backlog"
    assert column_for_status(TaskStatus.todo) == "todo"
    assert column_for_status("inprogress") == "doing"
    assert column_for_status("complete") == "done"
    assert column_for_status("archived") == "backlog"

    assert status_for_column("doing") == TaskStatus.inprogress
    assert status_for_column("done") == TaskStatus.complete
    assert status_for_column("elsewhere") == TaskStatus.todo


def test_empty_board(client: TestClient):
    """An empty database still returns every column in order."""
    response = client.get("/api/board")
    assert response.status_code == 200
    columns = response.json()["columns"]
    assert [c["id"] for c in columns] == ["backlog", "todo", "doing", "done"]
    assert [c["title"] for c in columns] == ["BACKLOG", "TO-DO", "DOING", "DONE"]
    assert all(c["tasks"] == [] for c in columns)


def test_board_groups_tasks(client: TestClient, make_project, make_task):
    """Tasks land in their status column, ordered by position."""
    project = make_project()
    make_task("second", projectId=project["id"], status="inprogress", position=2)
    make_task("first", projectId=project["id"], status="inprogress", position=1)
    make_task("shipped", projectId=project["id"], status="complete")
    make_task("elsewhere", status="backlog")

    columns = {c["id"]: c for c in client.get("/api/board").json()["columns"]}
    assert [t["title"] for t in columns["doing"]["tasks"]] == ["first", "second"]
    assert columns["doing"]["status"] == "inprogress"
    assert [t["title"] for t in columns["done"]["tasks"]] == ["shipped"]
    assert [t["title"] for t in columns["backlog"]["tasks"]] == ["elsewhere"]

    scoped = client.get(f"/api/board?projectId={project['id']}").json()["columns"]
    assert scoped[0]["tasks"] == []


def test_stats(client: TestClient, make_task):
    """Stats count tasks per status and sum XP of completed tasks."""
    make_task(status="complete", xpReward=150)
    make_task(status="complete", xpReward=50)
    make_task(status="todo", xpReward=500)

    data = client.get("/api/stats").json()
    assert data["totalTasks"] == 3
    assert data["completedTasks"] == 2
    assert data["xpEarned"] == 200
    assert data["byStatus"] == {"backlog": 0, "todo": 1, "inprogress": 0, "complete": 2}

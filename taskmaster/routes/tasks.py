# taskmaster/routes/tasks.py
"""CRUD endpoints for tasks.

Rows are addressed either with ``?id=`` on the collection, or by path
(``/api/tasks/{task_id}``); both forms share the same handlers.
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, col

from taskmaster.database import get_session
from taskmaster.models import Task
from taskmaster.queries import TASKS, build_list_query, optional_int, page_params
from taskmaster.repository import Repository
from taskmaster.schemas import TaskCreate, TaskDeleted, TaskRead, TaskStatusUpdate, TaskUpdate
from taskmaster.validation import (
    check_priority,
    check_project_ref,
    check_status,
    clean_text,
    not_null,
    parse_id,
    require_field,
    require_title,
    update_title,
)
from taskmaster.vocabulary import TaskPriority, TaskStatus

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def _repo(session: Session) -> Repository[Task]:
    return Repository(session, Task, "Task")


def task_changes(session: Session, body: TaskUpdate) -> dict:
    """Validate the fields present in an update body and return the column values."""
    fields = body.model_dump(exclude_unset=True)
    values = {}
    if "title" in fields:
        values["title"] = update_title(fields["title"])
    if "description" in fields:
        values["description"] = clean_text(fields["description"])
    if "due_date" in fields:
        values["due_date"] = clean_text(fields["due_date"])
    if "status" in fields:
        values["status"] = check_status(fields["status"])
    if "priority" in fields:
        values["priority"] = check_priority(fields["priority"])
    if "xp_reward" in fields:
        values["xp_reward"] = not_null(fields["xp_reward"], "xpReward")
    if "position" in fields:
        values["position"] = not_null(fields["position"], "position")
    if "project_id" in fields:
        values["project_id"] = check_project_ref(session, fields["project_id"])
    return values


def _deleted(task: Task) -> TaskDeleted:
    return TaskDeleted(
        message="Task deleted successfully", task=TaskRead.model_validate(task)
    )


@router.get("")
def read_tasks(
    row_id: Optional[str] = Query(default=None, alias="id"),
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    search: Optional[str] = None,
    project_id: Optional[str] = Query(default=None, alias="projectId"),
    status: Optional[str] = None,
    priority: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    session: Session = Depends(get_session),
) -> Union[TaskRead, List[TaskRead]]:
    """Get one task by ``id``, or a filtered page of tasks."""
    if row_id:
        return _repo(session).get_or_404(parse_id(row_id))

    filters = []
    project_ref = optional_int(project_id)
    if project_ref is not None:
        filters.append(col(Task.project_id) == project_ref)
    if status:
        filters.append(col(Task.status) == status)
    if priority:
        filters.append(col(Task.priority) == priority)

    params = page_params(TASKS, limit, offset, search, sort, order)
    return _repo(session).list(build_list_query(TASKS, params, filters))


@router.post("", status_code=201)
def create_task(body: TaskCreate, session: Session = Depends(get_session)) -> TaskRead:
    """Create a task. ``title`` and ``dueDate`` are required."""
    title = require_title(body.title)
    due_date = require_field(body.due_date, "dueDate", "Due date")
    status = check_status(body.status) if body.status is not None else TaskStatus.todo
    priority = (
        check_priority(body.priority) if body.priority is not None else TaskPriority.medium
    )
    project_id = check_project_ref(session, body.project_id)

    task = Task(
        title=title,
        description=clean_text(body.description),
        project_id=project_id,
        status=status,
        priority=priority,
        xp_reward=body.xp_reward if body.xp_reward is not None else 100,
        due_date=due_date,
        position=body.position if body.position is not None else 0,
    )
    return _repo(session).insert(task)


@router.put("")
def update_task(
    body: TaskUpdate,
    row_id: Optional[str] = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
) -> TaskRead:
    """Update a task. Only the fields present in the body are changed."""
    task_id = parse_id(row_id)
    return _repo(session).update(task_id, task_changes(session, body))


@router.delete("")
def delete_task(
    row_id: Optional[str] = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
) -> TaskDeleted:
    """Delete a task and return its last content."""
    return _deleted(_repo(session).delete(parse_id(row_id)))


@router.get("/{task_id}")
def get_task(task_id: str, session: Session = Depends(get_session)) -> TaskRead:
    """Get a single task by ID."""
    return _repo(session).get_or_404(parse_id(task_id))


@router.put("/{task_id}")
def update_task_by_path(
    task_id: str, body: TaskUpdate, session: Session = Depends(get_session)
) -> TaskRead:
    """Update an existing task. Only provided fields are changed."""
    row_id = parse_id(task_id)
    return _repo(session).update(row_id, task_changes(session, body))


@router.delete("/{task_id}")
def delete_task_by_path(task_id: str, session: Session = Depends(get_session)) -> TaskDeleted:
    """Delete a task by ID."""
    return _deleted(_repo(session).delete(parse_id(task_id)))


@router.patch("/{task_id}/status")
def update_task_status(
    task_id: str, body: TaskStatusUpdate, session: Session = Depends(get_session)
) -> TaskRead:
    """Move a task to another lifecycle status.

    Only ``backlog``, ``todo``, ``inprogress`` and ``complete`` are accepted;
    anything else leaves the task untouched.
    """
    row_id = parse_id(task_id)
    status = check_status(body.status)
    return _repo(session).update(row_id, {"status": status})

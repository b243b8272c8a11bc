# taskmaster/routes/upcoming_tasks.py
"""CRUD endpoints for upcoming tasks."""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, col

from taskmaster.database import get_session
from taskmaster.models import UpcomingTask
from taskmaster.queries import UPCOMING_TASKS, build_list_query, optional_int, page_params
from taskmaster.repository import Repository
from taskmaster.schemas import (
    UpcomingTaskCreate,
    UpcomingTaskDeleted,
    UpcomingTaskRead,
    UpcomingTaskUpdate,
)
from taskmaster.validation import (
    check_priority,
    check_project_ref,
    clean_text,
    parse_id,
    require_title,
    update_title,
)
from taskmaster.vocabulary import TaskPriority

router = APIRouter(prefix="/api/upcoming-tasks", tags=["upcoming-tasks"])


def _repo(session: Session) -> Repository[UpcomingTask]:
    return Repository(session, UpcomingTask, "Upcoming task")


@router.get("")
def read_upcoming_tasks(
    row_id: Optional[str] = Query(default=None, alias="id"),
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    search: Optional[str] = None,
    project_id: Optional[str] = Query(default=None, alias="projectId"),
    priority: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    session: Session = Depends(get_session),
) -> Union[UpcomingTaskRead, List[UpcomingTaskRead]]:
    """Get one upcoming task by ``id``, or a page ordered by due date."""
    if row_id:
        return _repo(session).get_or_404(parse_id(row_id))

    filters = []
    project_ref = optional_int(project_id)
    if project_ref is not None:
        filters.append(col(UpcomingTask.project_id) == project_ref)
    if priority:
        filters.append(col(UpcomingTask.priority) == priority)

    params = page_params(UPCOMING_TASKS, limit, offset, search, sort, order)
    return _repo(session).list(build_list_query(UPCOMING_TASKS, params, filters))


@router.post("", status_code=201)
def create_upcoming_task(
    body: UpcomingTaskCreate, session: Session = Depends(get_session)
) -> UpcomingTaskRead:
    title = require_title(body.title)
    priority = (
        check_priority(body.priority) if body.priority is not None else TaskPriority.medium
    )
    project_id = check_project_ref(session, body.project_id)

    task = UpcomingTask(
        title=title,
        description=clean_text(body.description),
        project_id=project_id,
        priority=priority,
        due_date=clean_text(body.due_date),
    )
    return _repo(session).insert(task)


@router.put("")
def update_upcoming_task(
    body: UpcomingTaskUpdate,
    row_id: Optional[str] = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
) -> UpcomingTaskRead:
    task_id = parse_id(row_id)
    fields = body.model_dump(exclude_unset=True)

    values = {}
    if "title" in fields:
        values["title"] = update_title(fields["title"])
    if "description" in fields:
        values["description"] = clean_text(fields["description"])
    if "due_date" in fields:
        values["due_date"] = clean_text(fields["due_date"])
    if "priority" in fields:
        values["priority"] = check_priority(fields["priority"])
    if "project_id" in fields:
        values["project_id"] = check_project_ref(session, fields["project_id"])

    return _repo(session).update(task_id, values)


@router.delete("")
def delete_upcoming_task(
    row_id: Optional[str] = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
) -> UpcomingTaskDeleted:
    task = _repo(session).delete(parse_id(row_id))
    return UpcomingTaskDeleted(
        message="Upcoming task deleted successfully",
        task=UpcomingTaskRead.model_validate(task),
    )

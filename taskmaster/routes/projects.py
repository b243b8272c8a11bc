# taskmaster/routes/projects.py
"""CRUD endpoints for projects."""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy import case, func
from sqlmodel import Session, col, select

from taskmaster.database import get_session
from taskmaster.errors import ApiError
from taskmaster.models import Project, Task, UpcomingTask
from taskmaster.queries import PROJECTS, build_list_query, page_params
from taskmaster.repository import Repository
from taskmaster.schemas import ProjectCreate, ProjectDeleted, ProjectRead, ProjectUpdate
from taskmaster.validation import (
    check_priority,
    clean_text,
    parse_id,
    reject_read_only,
    require_title,
    update_title,
)
from taskmaster.vocabulary import TaskPriority, TaskStatus

router = APIRouter(prefix="/api/projects", tags=["projects"])


def project_counts(session: Session, project_ids: list[int]) -> dict[int, tuple[int, int]]:
    """Map project id -> (linked tasks, completed linked tasks)."""
    if not project_ids:
        return {}
    statement = (
        select(
            Task.project_id,
            func.count(Task.id),
            func.sum(case((col(Task.status) == TaskStatus.complete, 1), else_=0)),
        )
        .where(col(Task.project_id).in_(project_ids))
        .group_by(Task.project_id)
    )
    return {
        project_id: (total, completed or 0)
        for project_id, total, completed in session.exec(statement).all()
    }


def to_read(session: Session, projects: list[Project]) -> list[ProjectRead]:
    counts = project_counts(session, [p.id for p in projects])
    result = []
    for project in projects:
        total, completed = counts.get(project.id, (0, 0))
        result.append(
            ProjectRead(
                **project.model_dump(),
                task_count=total,
                completed_tasks=completed,
            )
        )
    return result


@router.get("")
def read_projects(
    row_id: Optional[str] = Query(default=None, alias="id"),
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    search: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    session: Session = Depends(get_session),
) -> Union[ProjectRead, List[ProjectRead]]:
    """Get one project by ``id``, or a page of projects."""
    repo = Repository(session, Project, "Project")
    if row_id:
        project = repo.get_or_404(parse_id(row_id))
        return to_read(session, [project])[0]

    params = page_params(PROJECTS, limit, offset, search, sort, order)
    return to_read(session, repo.list(build_list_query(PROJECTS, params)))


@router.post("", status_code=201)
def create_project(
    body: ProjectCreate, session: Session = Depends(get_session)
) -> ProjectRead:
    """Create a project, plus any upcoming tasks embedded in the body.

    The project and its upcoming tasks commit together or not at all.
    """
    title = require_title(body.title)
    reject_read_only(body.model_fields_set)

    drafts = []
    for index, draft in enumerate(body.upcoming_tasks or []):
        try:
            drafts.append(
                UpcomingTask(
                    title=require_title(draft.title),
                    description=clean_text(draft.description),
                    due_date=clean_text(draft.due_date),
                    priority=(
                        check_priority(draft.priority)
                        if draft.priority is not None
                        else TaskPriority.medium
                    ),
                )
            )
        except ApiError as exc:
            exc.details = {**exc.details, "upcomingTaskIndex": index}
            raise

    projects = Repository(session, Project, "Project")
    upcoming = Repository(session, UpcomingTask, "Upcoming task")

    project = projects.stage(
        Project(
            title=title,
            description=clean_text(body.description),
            due_date=clean_text(body.due_date),
            category=clean_text(body.category),
        )
    )
    for draft in drafts:
        draft.project_id = project.id
        upcoming.stage(draft)
    session.commit()
    session.refresh(project)
    return to_read(session, [project])[0]


@router.put("")
def update_project(
    body: ProjectUpdate,
    row_id: Optional[str] = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
) -> ProjectRead:
    """Update a project. Only the fields present in the body are changed."""
    project_id = parse_id(row_id)
    fields = body.model_dump(exclude_unset=True)
    reject_read_only(set(fields))

    values = {}
    if "title" in fields:
        values["title"] = update_title(fields["title"])
    for name in ("description", "due_date", "category"):
        if name in fields:
            values[name] = clean_text(fields[name])

    project = Repository(session, Project, "Project").update(project_id, values)
    return to_read(session, [project])[0]


@router.delete("")
def delete_project(
    row_id: Optional[str] = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
) -> ProjectDeleted:
    """Delete a project. Its tasks and upcoming tasks are left in place."""
    project = Repository(session, Project, "Project").delete(parse_id(row_id))
    return ProjectDeleted(
        message="Project deleted successfully",
        project=to_read(session, [project])[0],
    )

# taskmaster/routes/board.py
"""Read-only views derived from tasks: the kanban board and dashboard counters."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func
from sqlmodel import Session, col, select

from taskmaster.database import get_session
from taskmaster.models import Task
from taskmaster.queries import optional_int
from taskmaster.schemas import Board, BoardColumn, TaskRead, TaskStats
from taskmaster.vocabulary import BOARD_COLUMNS, TaskStatus, column_for_status

router = APIRouter(prefix="/api", tags=["board"])


@router.get("/board")
def read_board(
    project_id: Optional[str] = Query(default=None, alias="projectId"),
    session: Session = Depends(get_session),
) -> Board:
    """Group tasks into the board columns, each ordered by position."""
    statement = select(Task).order_by(col(Task.position), col(Task.id))
    project_ref = optional_int(project_id)
    if project_ref is not None:
        statement = statement.where(col(Task.project_id) == project_ref)

    grouped: dict[str, list[TaskRead]] = {column_id: [] for column_id, _, _ in BOARD_COLUMNS}
    for task in session.exec(statement).all():
        grouped[column_for_status(task.status)].append(TaskRead.model_validate(task))

    return Board(
        columns=[
            BoardColumn(id=column_id, title=title, status=status, tasks=grouped[column_id])
            for column_id, title, status in BOARD_COLUMNS
        ]
    )


@router.get("/stats")
def read_stats(session: Session = Depends(get_session)) -> TaskStats:
    """Task counts per status and the XP earned from completed tasks."""
    statement = select(
        Task.status, func.count(Task.id), func.coalesce(func.sum(Task.xp_reward), 0)
    ).group_by(Task.status)

    by_status = {status.value: 0 for status in TaskStatus}
    xp_earned = 0
    for status, count, xp in session.exec(statement).all():
        by_status[TaskStatus(status).value] = count
        if status == TaskStatus.complete:
            xp_earned = xp

    return TaskStats(
        total_tasks=sum(by_status.values()),
        by_status=by_status,
        completed_tasks=by_status[TaskStatus.complete.value],
        xp_earned=xp_earned,
    )

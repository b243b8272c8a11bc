# taskmaster/vocabulary.py
"""Fixed status and priority vocabularies, and the kanban column mapping."""

from enum import Enum
from typing import Optional


class TaskStatus(str, Enum):
    backlog = "backlog"
    todo = "todo"
    inprogress = "inprogress"
    complete = "complete"


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


# Offered by the project form; stored as free text.
PROJECT_CATEGORIES = ("Design", "Development", "Marketing", "Research", "Infrastructure")

PRIORITY_WEIGHTS = {
    TaskPriority.low: 0,
    TaskPriority.medium: 1,
    TaskPriority.high: 2,
}

# Board columns in display order: (column id, title, status)
BOARD_COLUMNS = (
    ("backlog", "BACKLOG", TaskStatus.backlog),
    ("todo", "TO-DO", TaskStatus.todo),
    ("doing", "DOING", TaskStatus.inprogress),
    ("done", "DONE", TaskStatus.complete),
)

_STATUS_TO_COLUMN = {status: column_id for column_id, _, status in BOARD_COLUMNS}
_COLUMN_TO_STATUS = {column_id: status for column_id, _, status in BOARD_COLUMNS}


def parse_status(value) -> Optional[TaskStatus]:
    """Return the matching TaskStatus, or None if *value* is not in the vocabulary."""
    try:
        return TaskStatus(value)
    except ValueError:
        return None


def parse_priority(value) -> Optional[TaskPriority]:
    """Return the matching TaskPriority, or None if *value* is not in the vocabulary."""
    try:
        return TaskPriority(value)
    except ValueError:
        return None


def column_for_status(status) -> str:
    """Board column a task with *status* sits in. Unknown statuses land in backlog."""
    parsed = parse_status(status)
    if parsed is None:
        return "backlog"
    return _STATUS_TO_COLUMN[parsed]


def status_for_column(column_id: str) -> TaskStatus:
    """Status a task takes when dropped into *column_id*. Unknown columns mean todo."""
    return _COLUMN_TO_STATUS.get(column_id, TaskStatus.todo)

# taskmaster/validation.py
"""Checks run before any write: required fields, vocabularies, references.

Each helper either returns a cleaned value or raises an ``invalid_input``
:class:`~taskmaster.errors.ApiError` carrying a machine-readable code.
"""

from typing import Any, Optional

from sqlmodel import Session

from taskmaster.errors import invalid_input
from taskmaster.models import MAX_INT, Project, Task
from taskmaster.vocabulary import TaskPriority, TaskStatus, parse_priority, parse_status

# Derived project counters: attribute name -> JSON name
READ_ONLY_PROJECT_FIELDS = {"task_count": "taskCount", "completed_tasks": "completedTasks"}


def parse_id(raw: Optional[str]) -> int:
    """Parse a resource id from a path or query string.

    Absent, non-numeric, non-positive and out-of-range ids are all
    ``INVALID_ID``.
    """
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise invalid_input("INVALID_ID", "Valid ID is required", id=raw) from None
    if not 0 < value <= MAX_INT:
        raise invalid_input("INVALID_ID", "Valid ID is required", id=raw)
    return value


def clean_text(value: Optional[str]) -> Optional[str]:
    """Trim *value*; blank strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def require_title(value: Optional[str]) -> str:
    """Title for a create request; missing or blank is ``MISSING_REQUIRED_FIELD``."""
    title = clean_text(value)
    if title is None:
        raise invalid_input(
            "MISSING_REQUIRED_FIELD", "Title is required", field="title"
        )
    return title


def update_title(value: Optional[str]) -> str:
    """Title supplied on an update; it cannot be cleared."""
    title = clean_text(value)
    if title is None:
        raise invalid_input("INVALID_TITLE", "Title cannot be empty", field="title")
    return title


def require_field(value: Any, field: str, label: str) -> Any:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise invalid_input(
            "MISSING_REQUIRED_FIELD", f"{label} is required", field=field
        )
    return value.strip() if isinstance(value, str) else value


def not_null(value: Any, field: str) -> Any:
    """Non-nullable columns may be changed on update but not cleared."""
    if value is None:
        raise invalid_input("INVALID_FIELD", f"{field} cannot be null", field=field)
    return value


def check_status(value: Any) -> TaskStatus:
    status = parse_status(value)
    if status is None:
        raise invalid_input(
            "INVALID_STATUS",
            "Invalid status",
            status=value,
            allowed=[s.value for s in TaskStatus],
        )
    return status


def check_priority(value: Any) -> TaskPriority:
    priority = parse_priority(value)
    if priority is None:
        raise invalid_input(
            "INVALID_PRIORITY",
            "Invalid priority",
            priority=value,
            allowed=[p.value for p in TaskPriority],
        )
    return priority


def _parse_reference(value: Any, code: str, label: str) -> int:
    if isinstance(value, bool):
        raise invalid_input(code, f"Valid {label} ID is required", value=value)
    try:
        ref = int(str(value).strip())
    except (TypeError, ValueError):
        raise invalid_input(code, f"Valid {label} ID is required", value=value) from None
    if not 0 < ref <= MAX_INT:
        raise invalid_input(code, f"Valid {label} ID is required", value=value)
    return ref


def check_project_ref(session: Session, value: Any) -> Optional[int]:
    """Validate a ``projectId`` from a request body.

    None passes through (no project). Otherwise the value must parse as an
    id (``INVALID_PROJECT_ID``) of a project that exists right now
    (``PROJECT_NOT_FOUND``).
    """
    if value is None:
        return None
    project_id = _parse_reference(value, "INVALID_PROJECT_ID", "project")
    if session.get(Project, project_id) is None:
        raise invalid_input(
            "PROJECT_NOT_FOUND", "Project not found", project_id=project_id
        )
    return project_id


def check_task_ref(session: Session, value: Any) -> Optional[int]:
    """Validate a ``taskId`` the same way :func:`check_project_ref` does."""
    if value is None:
        return None
    task_id = _parse_reference(value, "INVALID_TASK_ID", "task")
    if session.get(Task, task_id) is None:
        raise invalid_input("TASK_NOT_FOUND", "Task not found", task_id=task_id)
    return task_id


def parse_task_ref(value: Any) -> Optional[int]:
    """Parse a ``taskId`` without checking that the task exists."""
    if value is None:
        return None
    return _parse_reference(value, "INVALID_TASK_ID", "task")


def reject_read_only(fields: set) -> None:
    """Project counters are derived from tasks and cannot be written."""
    for name, json_name in READ_ONLY_PROJECT_FIELDS.items():
        if name in fields:
            raise invalid_input(
                "READ_ONLY_FIELD",
                f"{json_name} is derived from the project's tasks and cannot be set",
                field=json_name,
            )

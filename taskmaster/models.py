# taskmaster/models.py
"""Table models for projects, tasks, upcoming tasks and calendar events."""

import threading
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlmodel import Field, SQLModel

from taskmaster.vocabulary import TaskPriority, TaskStatus

# Largest value an INTEGER column can hold.
MAX_INT = 2**63 - 1

_clock_lock = threading.Lock()
_last_stamp: Optional[datetime] = None


def utc_now_iso() -> str:
    """Return the current UTC time as an ISO-8601 string.

    Stamps issued by this process never repeat or go backwards, so an
    ``updated_at`` written after another always sorts after it.
    """
    global _last_stamp
    with _clock_lock:
        now = datetime.now(timezone.utc)
        if _last_stamp is not None and now <= _last_stamp:
            now = _last_stamp + timedelta(microseconds=1)
        _last_stamp = now
    return now.isoformat(timespec="microseconds").replace("+00:00", "Z")


class Project(SQLModel, table=True):
    """Project table. Task counters are derived from ``tasks`` on read."""
    __tablename__ = "projects"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = Field(default=None)
    due_date: Optional[str] = Field(default=None)
    category: Optional[str] = Field(default=None)
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)


class Task(SQLModel, table=True):
    __tablename__ = "tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = Field(default=None)
    project_id: Optional[int] = Field(default=None, foreign_key="projects.id")
    status: TaskStatus = Field(default=TaskStatus.todo)
    priority: TaskPriority = Field(default=TaskPriority.medium)
    xp_reward: int = Field(default=100)
    due_date: Optional[str] = Field(default=None)
    position: int = Field(default=0)
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)


class UpcomingTask(SQLModel, table=True):
    """Tasks planned for a project but not yet promoted to the task list."""
    __tablename__ = "upcoming_tasks"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = Field(default=None)
    project_id: Optional[int] = Field(default=None, foreign_key="projects.id")
    priority: TaskPriority = Field(default=TaskPriority.medium)
    due_date: Optional[str] = Field(default=None)
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)


class CalendarEvent(SQLModel, table=True):
    __tablename__ = "calendar_events"

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: Optional[str] = Field(default=None)
    task_id: Optional[int] = Field(default=None, foreign_key="tasks.id")
    start_date: str
    end_date: Optional[str] = Field(default=None)
    all_day: bool = Field(default=False)
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)

# taskmaster/schemas.py
"""Request and response bodies. JSON field names are camelCase."""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taskmaster.models import MAX_INT
from taskmaster.vocabulary import TaskPriority, TaskStatus

# Foreign keys arrive as ints or numeric strings; anything else is rejected
# by the validation layer with a resource-specific code.
IdLike = Union[int, str]


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# -- projects -----------------------------------------------------------------


class UpcomingTaskDraft(ApiModel):
    """An upcoming task embedded in a project create request."""
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = None
    priority: Optional[str] = None


class ProjectCreate(ApiModel):
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = None
    category: Optional[str] = None
    upcoming_tasks: Optional[List[UpcomingTaskDraft]] = None
    # Derived on read; accepted here only so a supplied value can be rejected.
    task_count: Optional[Any] = None
    completed_tasks: Optional[Any] = None


class ProjectUpdate(ApiModel):
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[str] = None
    category: Optional[str] = None
    task_count: Optional[Any] = None
    completed_tasks: Optional[Any] = None


class ProjectRead(ApiModel):
    id: int
    title: str
    description: Optional[str] = None
    task_count: int = 0
    completed_tasks: int = 0
    due_date: Optional[str] = None
    category: Optional[str] = None
    created_at: str
    updated_at: str


class ProjectDeleted(ApiModel):
    message: str
    project: ProjectRead


# -- tasks --------------------------------------------------------------------


class TaskCreate(ApiModel):
    title: Optional[str] = None
    description: Optional[str] = None
    project_id: Optional[IdLike] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    xp_reward: Optional[int] = Field(default=None, ge=-MAX_INT, le=MAX_INT)
    due_date: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=-MAX_INT, le=MAX_INT)


class TaskUpdate(TaskCreate):
    """All fields optional; only the ones present in the body are written."""


class TaskStatusUpdate(ApiModel):
    status: Optional[str] = None


class TaskRead(ApiModel):
    id: int
    title: str
    description: Optional[str] = None
    project_id: Optional[int] = None
    status: TaskStatus
    priority: TaskPriority
    xp_reward: int
    due_date: Optional[str] = None
    position: int
    created_at: str
    updated_at: str


class TaskDeleted(ApiModel):
    message: str
    task: TaskRead


# -- upcoming tasks -----------------------------------------------------------


class UpcomingTaskCreate(ApiModel):
    title: Optional[str] = None
    description: Optional[str] = None
    project_id: Optional[IdLike] = None
    priority: Optional[str] = None
    due_date: Optional[str] = None


class UpcomingTaskUpdate(UpcomingTaskCreate):
    pass


class UpcomingTaskRead(ApiModel):
    id: int
    title: str
    description: Optional[str] = None
    project_id: Optional[int] = None
    priority: TaskPriority
    due_date: Optional[str] = None
    created_at: str
    updated_at: str


class UpcomingTaskDeleted(ApiModel):
    message: str
    task: UpcomingTaskRead


# -- calendar events ----------------------------------------------------------


class CalendarEventCreate(ApiModel):
    title: Optional[str] = None
    description: Optional[str] = None
    task_id: Optional[IdLike] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    all_day: Optional[bool] = None


class CalendarEventUpdate(CalendarEventCreate):
    pass


class CalendarEventRead(ApiModel):
    id: int
    title: str
    description: Optional[str] = None
    task_id: Optional[int] = None
    start_date: str
    end_date: Optional[str] = None
    all_day: bool
    created_at: str
    updated_at: str


class CalendarEventDeleted(ApiModel):
    message: str
    event: CalendarEventRead


# -- board & stats ------------------------------------------------------------


class BoardColumn(ApiModel):
    id: str
    title: str
    status: TaskStatus
    tasks: List[TaskRead]


class Board(ApiModel):
    columns: List[BoardColumn]


class TaskStats(ApiModel):
    total_tasks: int
    by_status: dict
    completed_tasks: int
    xp_earned: int

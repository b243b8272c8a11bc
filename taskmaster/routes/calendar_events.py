# taskmaster/routes/calendar_events.py
"""CRUD endpoints for calendar events."""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session, col

from taskmaster.database import get_session
from taskmaster.models import CalendarEvent
from taskmaster.queries import (
    CALENDAR_EVENTS,
    build_list_query,
    date_range_clause,
    optional_int,
    page_params,
)
from taskmaster.repository import Repository
from taskmaster.schemas import (
    CalendarEventCreate,
    CalendarEventDeleted,
    CalendarEventRead,
    CalendarEventUpdate,
)
from taskmaster.validation import (
    check_task_ref,
    clean_text,
    not_null,
    parse_id,
    parse_task_ref,
    require_field,
    require_title,
    update_title,
)

router = APIRouter(prefix="/api/calendar-events", tags=["calendar-events"])


def _repo(session: Session) -> Repository[CalendarEvent]:
    return Repository(session, CalendarEvent, "Calendar event")


@router.get("")
def read_calendar_events(
    row_id: Optional[str] = Query(default=None, alias="id"),
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    search: Optional[str] = None,
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    task_id: Optional[str] = Query(default=None, alias="taskId"),
    sort: Optional[str] = None,
    order: Optional[str] = None,
    session: Session = Depends(get_session),
) -> Union[CalendarEventRead, List[CalendarEventRead]]:
    """Get one event by ``id``, or the events whose start falls in a date range.

    ``startDate`` and ``endDate`` bound the event's start date inclusively;
    either may be given alone.
    """
    if row_id:
        return _repo(session).get_or_404(parse_id(row_id))

    filters = [date_range_clause(col(CalendarEvent.start_date), start_date, end_date)]
    task_ref = optional_int(task_id)
    if task_ref is not None:
        filters.append(col(CalendarEvent.task_id) == task_ref)

    params = page_params(CALENDAR_EVENTS, limit, offset, search, sort, order)
    return _repo(session).list(build_list_query(CALENDAR_EVENTS, params, filters))


@router.post("", status_code=201)
def create_calendar_event(
    body: CalendarEventCreate, session: Session = Depends(get_session)
) -> CalendarEventRead:
    """Create an event. ``title`` and ``startDate`` are required."""
    title = require_title(body.title)
    start_date = require_field(body.start_date, "startDate", "Start date")
    task_id = check_task_ref(session, body.task_id)

    event = CalendarEvent(
        title=title,
        description=clean_text(body.description),
        task_id=task_id,
        start_date=start_date,
        end_date=clean_text(body.end_date),
        all_day=bool(body.all_day),
    )
    return _repo(session).insert(event)


@router.put("")
def update_calendar_event(
    body: CalendarEventUpdate,
    row_id: Optional[str] = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
) -> CalendarEventRead:
    """Update an event. Only the fields present in the body are changed."""
    event_id = parse_id(row_id)
    fields = body.model_dump(exclude_unset=True)

    values = {}
    if "title" in fields:
        values["title"] = update_title(fields["title"])
    if "description" in fields:
        values["description"] = clean_text(fields["description"])
    if "start_date" in fields:
        values["start_date"] = require_field(fields["start_date"], "startDate", "Start date")
    if "end_date" in fields:
        values["end_date"] = clean_text(fields["end_date"])
    if "all_day" in fields:
        values["all_day"] = not_null(fields["all_day"], "allDay")
    if "task_id" in fields:
        # Task existence is only checked on create.
        values["task_id"] = parse_task_ref(fields["task_id"])

    return _repo(session).update(event_id, values)


@router.delete("")
def delete_calendar_event(
    row_id: Optional[str] = Query(default=None, alias="id"),
    session: Session = Depends(get_session),
) -> CalendarEventDeleted:
    event = _repo(session).delete(parse_id(row_id))
    return CalendarEventDeleted(
        message="Calendar event deleted successfully",
        event=CalendarEventRead.model_validate(event),
    )

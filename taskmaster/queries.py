# taskmaster/queries.py
"""Translate list parameters into a bounded, ordered, filtered SELECT.

Each resource describes itself with a :class:`Listing`: which columns are
searchable, which may be sorted on, and its paging bounds. Filters specific
to a resource are passed in as ready-made SQL predicates and AND-ed with the
free-text search, which is itself an OR across the listing's search columns.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from sqlalchemy import and_, asc, case, desc, or_
from sqlmodel import select

from taskmaster.models import MAX_INT, CalendarEvent, Project, Task, UpcomingTask
from taskmaster.vocabulary import PRIORITY_WEIGHTS


@dataclass(frozen=True)
class Listing:
    model: Any
    search_columns: tuple
    sort_columns: dict
    default_sort: str
    default_order: str
    default_limit: int
    max_limit: int
    # Sort keys whose column should be ordered by a weight rather than its value.
    weighted: dict = field(default_factory=dict)


@dataclass(frozen=True)
class PageParams:
    limit: int
    offset: int
    search: Optional[str]
    sort: str
    order: str


def _priority_weight(column):
    return case(
        dict(PRIORITY_WEIGHTS),
        value=column,
        else_=len(PRIORITY_WEIGHTS),
    )


PROJECTS = Listing(
    model=Project,
    search_columns=(Project.title, Project.category),
    sort_columns={
        "id": Project.id,
        "title": Project.title,
        "category": Project.category,
        "createdAt": Project.created_at,
        "updatedAt": Project.updated_at,
        "dueDate": Project.due_date,
    },
    default_sort="createdAt",
    default_order="desc",
    default_limit=10,
    max_limit=100,
)

TASKS = Listing(
    model=Task,
    search_columns=(Task.title, Task.description),
    sort_columns={
        "id": Task.id,
        "title": Task.title,
        "status": Task.status,
        "priority": Task.priority,
        "dueDate": Task.due_date,
        "position": Task.position,
        "createdAt": Task.created_at,
        "updatedAt": Task.updated_at,
    },
    default_sort="createdAt",
    default_order="desc",
    default_limit=10,
    max_limit=100,
    weighted={"priority": _priority_weight},
)

UPCOMING_TASKS = Listing(
    model=UpcomingTask,
    search_columns=(UpcomingTask.title, UpcomingTask.description),
    sort_columns={
        "id": UpcomingTask.id,
        "title": UpcomingTask.title,
        "priority": UpcomingTask.priority,
        "dueDate": UpcomingTask.due_date,
        "createdAt": UpcomingTask.created_at,
        "updatedAt": UpcomingTask.updated_at,
    },
    default_sort="dueDate",
    default_order="asc",
    default_limit=50,
    max_limit=100,
    weighted={"priority": _priority_weight},
)

CALENDAR_EVENTS = Listing(
    model=CalendarEvent,
    search_columns=(CalendarEvent.title, CalendarEvent.description),
    sort_columns={
        "id": CalendarEvent.id,
        "title": CalendarEvent.title,
        "startDate": CalendarEvent.start_date,
        "endDate": CalendarEvent.end_date,
        "createdAt": CalendarEvent.created_at,
        "updatedAt": CalendarEvent.updated_at,
    },
    default_sort="startDate",
    default_order="asc",
    default_limit=100,
    max_limit=200,
)


def page_params(
    listing: Listing,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    search: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
) -> PageParams:
    """Normalize raw query parameters against *listing*.

    ``limit`` is clamped to ``[1, max_limit]`` and ``offset`` to ``>= 0``.
    Unknown sort keys and orders fall back to the resource defaults.
    """
    if limit is None:
        limit = listing.default_limit
    limit = max(1, min(limit, listing.max_limit))
    offset = min(max(0, offset or 0), MAX_INT)

    sort_key = sort if sort in listing.sort_columns else listing.default_sort
    order_key = (order or "").lower()
    if order_key not in ("asc", "desc"):
        order_key = listing.default_order

    return PageParams(
        limit=limit,
        offset=offset,
        search=search or None,
        sort=sort_key,
        order=order_key,
    )


def search_clause(listing: Listing, term: str):
    """Substring match of *term* against any of the listing's search columns."""
    return or_(
        *(column.contains(term, autoescape=True) for column in listing.search_columns)
    )


def date_range_clause(column, start: Optional[str], end: Optional[str]):
    """Inclusive range on *column*; one-sided when only one bound is given."""
    if start and end:
        return and_(column >= start, column <= end)
    if start:
        return column >= start
    if end:
        return column <= end
    return None


def optional_int(raw: Optional[str]) -> Optional[int]:
    """Parse a numeric filter value.

    Non-numeric values, and numbers no INTEGER column can hold, disable
    the filter.
    """
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    if abs(value) > MAX_INT:
        return None
    return value


def build_list_query(listing: Listing, params: PageParams, filters: Sequence = ()):
    """Build the SELECT for one page of *listing*'s rows.

    Rows are ordered by the requested column, then by id in the same
    direction so equal keys still page deterministically.
    """
    conditions = [f for f in filters if f is not None]
    if params.search:
        conditions.append(search_clause(listing, params.search))

    statement = select(listing.model)
    if conditions:
        statement = statement.where(and_(*conditions))

    column = listing.sort_columns[params.sort]
    weight = listing.weighted.get(params.sort)
    sort_expr = weight(column) if weight is not None else column
    direction = asc if params.order == "asc" else desc

    return (
        statement.order_by(direction(sort_expr), direction(listing.model.id))
        .offset(params.offset)
        .limit(params.limit)
    )

# taskmaster/repository.py
"""Row access shared by every resource router.

Update and delete are each a single ``... WHERE id = ? RETURNING *``
statement, so there is no window between finding the row and changing it:
a row deleted concurrently simply produces a not-found.
"""

import logging
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import delete, update
from sqlmodel import Session, SQLModel

from taskmaster.errors import not_found
from taskmaster.models import utc_now_iso

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


class Repository(Generic[ModelT]):
    """CRUD over one table model.

    Parameters
    ----------
    session : Session
        The request's session. Mutations commit it.
    model : type
        The SQLModel table class.
    label : str
        Human name used in not-found messages, e.g. ``"Upcoming task"``.
    """

    def __init__(self, session: Session, model: Type[ModelT], label: str) -> None:
        self.session = session
        self.model = model
        self.label = label
        self._table = model.__table__

    # -- reads ---------------------------------------------------------------

    def get(self, row_id: int) -> Optional[ModelT]:
        return self.session.get(self.model, row_id)

    def get_or_404(self, row_id: int) -> ModelT:
        row = self.get(row_id)
        if row is None:
            raise not_found(self.label, row_id)
        return row

    def list(self, statement) -> list[ModelT]:
        return list(self.session.exec(statement).all())

    # -- writes --------------------------------------------------------------

    def insert(self, row: ModelT) -> ModelT:
        """Insert *row* with fresh timestamps and commit."""
        self.stage(row)
        self.session.commit()
        self.session.refresh(row)
        logger.info("Created %s %s", self.label.lower(), row.id)
        return row

    def stage(self, row: ModelT) -> ModelT:
        """Add *row* to the open transaction without committing.

        The row's id is assigned by the flush.
        """
        stamp = utc_now_iso()
        row.created_at = stamp
        row.updated_at = stamp
        self.session.add(row)
        self.session.flush()
        return row

    def update(self, row_id: int, values: dict[str, Any]) -> ModelT:
        """Write *values* to row *row_id* and refresh ``updated_at``.

        Raises a not-found :class:`~taskmaster.errors.ApiError` if no row
        matched.
        """
        values = {**values, "updated_at": utc_now_iso()}
        statement = (
            update(self._table)
            .where(self._table.c.id == row_id)
            .values(**values)
            .returning(*self._table.c)
        )
        row = self._run_returning(statement)
        if row is None:
            self.session.rollback()
            raise not_found(self.label, row_id)
        self.session.commit()
        logger.info("Updated %s %s: %s", self.label.lower(), row_id, sorted(values))
        return row

    def delete(self, row_id: int) -> ModelT:
        """Delete row *row_id* and return its last content."""
        statement = (
            delete(self._table)
            .where(self._table.c.id == row_id)
            .returning(*self._table.c)
        )
        row = self._run_returning(statement)
        if row is None:
            self.session.rollback()
            raise not_found(self.label, row_id)
        self.session.commit()
        logger.info("Deleted %s %s", self.label.lower(), row_id)
        return row

    # -- private helpers -----------------------------------------------------

    def _run_returning(self, statement) -> Optional[ModelT]:
        result = self.session.connection().execute(statement)
        mapping = result.mappings().first()
        if mapping is None:
            return None
        return self.model.model_validate(dict(mapping))

# taskmaster/database.py
"""Database engine, per-request sessions, and dev auto-migration using SQLModel."""

import logging
from enum import Enum

from sqlalchemy import Column, Table, inspect, text
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from taskmaster import config
from taskmaster import models  # noqa: F401  (registers the tables on SQLModel.metadata)

logger = logging.getLogger(__name__)


def build_engine(url: str = config.DATABASE_URL):
    """Create an engine for *url*.

    SQLite connections are shared across FastAPI's worker threads, and an
    in-memory URL keeps a single connection so every session sees the same
    store. Foreign keys stay unenforced by SQLite: references are checked
    when written, and deleting a project leaves its tasks in place.
    """
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=config.DATABASE_ECHO, **kwargs)
    return create_engine(
        url,
        echo=config.DATABASE_ECHO,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,
    )


engine = build_engine()


def _compile_column_type(column: Column, dialect) -> str:
    """Compile a SQLAlchemy column type to a DDL string for *dialect*."""
    return column.type.compile(dialect=dialect)


def _default_clause(column: Column, dialect) -> str:
    """Derive a DEFAULT clause for NOT NULL columns added via ALTER TABLE.

    Adding a NOT NULL column to a populated table needs a default value.
    Returns an empty string if the column is nullable.
    """
    if column.nullable:
        return ""

    if column.default is not None and column.default.is_scalar:
        value = column.default.arg
        if isinstance(value, Enum):
            value = value.value
        if isinstance(value, bool):
            return f" DEFAULT {int(value)}"
        if isinstance(value, (int, float)):
            return f" DEFAULT {value}"
        escaped = str(value).replace("'", "''")
        return f" DEFAULT '{escaped}'"

    type_str = _compile_column_type(column, dialect).upper()
    if "INT" in type_str or "BOOL" in type_str:
        return " DEFAULT 0"
    if "FLOAT" in type_str or "REAL" in type_str or "NUMERIC" in type_str:
        return " DEFAULT 0.0"
    return " DEFAULT ''"


def _diff_table(inspector, table: Table, dialect) -> tuple[set, set, set]:
    """Return (added, removed, type_changed) column names for *table*."""
    db_columns = {col["name"]: col for col in inspector.get_columns(table.name)}
    model_columns = {col.name: col for col in table.columns}

    added = set(model_columns) - set(db_columns)
    removed = set(db_columns) - set(model_columns)

    type_changed = set()
    for name in set(db_columns) & set(model_columns):
        db_type = str(db_columns[name]["type"]).upper()
        model_type = _compile_column_type(model_columns[name], dialect).upper()
        if db_type != model_type:
            logger.debug(
                "Type mismatch on '%s.%s': db=%s model=%s",
                table.name, name, db_type, model_type,
            )
            type_changed.add(name)
    return added, removed, type_changed


def auto_migrate(bind=None) -> None:
    """Bring existing tables in line with the SQLModel metadata.

    - New columns: ALTER TABLE ADD COLUMN, keeping the rows.
    - Removed columns or type changes: drop and recreate the table (dev only).

    Tables that do not exist yet are left to ``create_all``.
    """
    bind = bind if bind is not None else engine
    inspector = inspect(bind)
    existing_tables = set(inspector.get_table_names())

    for table_name, table in SQLModel.metadata.tables.items():
        if table_name not in existing_tables:
            continue

        added, removed, type_changed = _diff_table(inspector, table, bind.dialect)
        if not (added or removed or type_changed):
            continue

        if added and not removed and not type_changed:
            logger.info("Adding columns to '%s': %s", table_name, sorted(added))
            with bind.begin() as conn:
                for name in sorted(added):
                    column = table.columns[name]
                    nullable = "" if column.nullable else " NOT NULL"
                    stmt = (
                        f'ALTER TABLE "{table_name}" ADD COLUMN "{name}" '
                        f"{_compile_column_type(column, bind.dialect)}"
                        f"{nullable}{_default_clause(column, bind.dialect)}"
                    )
                    logger.info("  %s", stmt)
                    conn.execute(text(stmt))
            continue

        logger.warning(
            "Recreating table '%s' (added=%s, removed=%s, type_changed=%s); "
            "existing rows will be lost",
            table_name, sorted(added), sorted(removed), sorted(type_changed),
        )
        with bind.begin() as conn:
            conn.execute(text(f'DROP TABLE "{table_name}"'))
        table.create(bind)


def create_db_and_tables(bind=None) -> None:
    """Create all tables from SQLModel metadata, then auto-migrate schema diffs."""
    bind = bind if bind is not None else engine
    SQLModel.metadata.create_all(bind)
    auto_migrate(bind)


def get_session():
    """Yield a database session for FastAPI dependency injection.

    Objects stay readable after commit so deleted rows can still be
    returned to the caller.
    """
    with Session(engine, expire_on_commit=False) as session:
        yield session

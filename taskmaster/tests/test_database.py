"""Tests for schema auto-migration and the sample data seed."""

from sqlalchemy import inspect, text
from sqlmodel import Session, select

from taskmaster.database import build_engine, create_db_and_tables
from taskmaster.models import Project
from taskmaster.seed import SAMPLE_PROJECTS, seed_demo_data


def test_create_db_and_tables_adds_missing_columns():
    """Existing tables gain new columns without losing rows."""
    engine = build_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE projects ("
            "id INTEGER NOT NULL PRIMARY KEY, "
            "title VARCHAR NOT NULL, "
            "description VARCHAR, "
            "due_date VARCHAR, "
            "created_at VARCHAR NOT NULL, "
            "updated_at VARCHAR NOT NULL)"
        ))
        conn.execute(text(
            "INSERT INTO projects (title, created_at, updated_at) "
            "VALUES ('Legacy', '2024-01-01T00:00:00Z', '2024-01-01T00:00:00Z')"
        ))

    create_db_and_tables(engine)

    inspector = inspect(engine)
    assert "category" in {c["name"] for c in inspector.get_columns("projects")}
    assert {"tasks", "upcoming_tasks", "calendar_events"} <= set(inspector.get_table_names())
    with Session(engine) as session:
        legacy = session.exec(select(Project)).one()
        assert legacy.title == "Legacy"
        assert legacy.category is None


def test_seed_only_fills_an_empty_table(session: Session):
    """Seeding twice inserts the sample projects once."""
    assert seed_demo_data(session) == len(SAMPLE_PROJECTS)
    assert seed_demo_data(session) == 0

    titles = session.exec(select(Project.title)).all()
    assert sorted(titles) == sorted(p["title"] for p in SAMPLE_PROJECTS)

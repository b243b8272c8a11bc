# taskmaster/seed.py
"""Sample projects for a fresh database.

Run with ``python -m taskmaster.seed``; the API also calls
:func:`seed_demo_data` on startup when ``TASKMASTER_SEED=1``.
"""

import logging

from sqlmodel import Session, select

from taskmaster.database import create_db_and_tables, engine
from taskmaster.models import Project

logger = logging.getLogger(__name__)

SAMPLE_PROJECTS = [
    {
        "title": "Website Redesign",
        "description": "Complete overhaul of the company website for better user experience and modern aesthetics.",
        "due_date": "2024-07-30",
        "category": "Design",
    },
    {
        "title": "Mobile App Development",
        "description": "Development of an iOS and Android application with core features for Q3 launch.",
        "due_date": "2024-08-20",
        "category": "Development",
    },
    {
        "title": "Marketing Campaign Q4",
        "description": "Planning and execution of the end-of-year marketing campaign across all digital channels.",
        "due_date": "2024-09-15",
        "category": "Marketing",
    },
    {
        "title": "E-commerce Platform",
        "description": "Building a robust e-commerce solution with integrated payment gateways and inventory management.",
        "due_date": "2024-08-01",
        "category": "Development",
    },
    {
        "title": "Brand Identity Refresh",
        "description": "Revisiting and updating the company's brand guidelines, logo, and visual assets.",
        "due_date": "2024-06-10",
        "category": "Design",
    },
]


def seed_demo_data(session: Session) -> int:
    """Insert the sample projects if the projects table is empty.

    Returns the number of projects inserted.
    """
    if session.exec(select(Project).limit(1)).first() is not None:
        logger.info("Projects already present; skipping seed")
        return 0

    for sample in SAMPLE_PROJECTS:
        session.add(Project(**sample))
    session.commit()
    logger.info("Seeded %d sample projects", len(SAMPLE_PROJECTS))
    return len(SAMPLE_PROJECTS)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_db_and_tables()
    with Session(engine) as session:
        seed_demo_data(session)

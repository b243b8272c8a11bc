# taskmaster/main.py
"""FastAPI application for the Taskmaster projects and tasks backend."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import Session

from taskmaster import config
from taskmaster.database import create_db_and_tables, engine
from taskmaster.errors import install_error_handlers
from taskmaster.routes.board import router as board_router
from taskmaster.routes.calendar_events import router as calendar_events_router
from taskmaster.routes.projects import router as projects_router
from taskmaster.routes.tasks import router as tasks_router
from taskmaster.routes.upcoming_tasks import router as upcoming_tasks_router
from taskmaster.seed import seed_demo_data

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create database tables on startup, optionally seeding sample data."""
    create_db_and_tables()
    if config.SEED_ON_STARTUP:
        with Session(engine) as session:
            seed_demo_data(session)
    logger.info("Taskmaster API ready")
    yield


app = FastAPI(title="Taskmaster", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["Content-Type"],
)

install_error_handlers(app)

app.include_router(projects_router)
app.include_router(tasks_router)
app.include_router(upcoming_tasks_router)
app.include_router(calendar_events_router)
app.include_router(board_router)


@app.get("/api/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "taskmaster-api"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("taskmaster.main:app", host=config.HOST, port=config.PORT, reload=True)

# taskmaster/config.py
"""Environment-driven settings for the Taskmaster API."""

import logging
import os
from pathlib import Path

DB_PATH = Path(__file__).parent / "data.db"
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DB_PATH}")
DATABASE_ECHO = os.getenv("DATABASE_ECHO", "").lower() == "true"

ALLOWED_ORIGINS = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000,http://localhost:5173",
).split(",")

LOG_LEVEL = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)

# Insert the sample projects on startup when the projects table is empty.
SEED_ON_STARTUP = os.getenv("TASKMASTER_SEED", "") in ("1", "true", "yes")

HOST = os.getenv("HOST", "127.0.0.1")
PORT = int(os.getenv("PORT", "8000"))

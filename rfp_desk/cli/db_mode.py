"""Database mode: create tables."""

from rfp_desk.config import DATABASE_URL
from rfp_desk.db import init_db

from .shared import console, logger


def init_db_command() -> None:
    """Create all tables (existing tables are left untouched)."""
    init_db()
    logger.info("db.initialized")
    console.print(f"[green]Database ready:[/green] {DATABASE_URL}")

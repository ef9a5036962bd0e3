"""Shared test setup: a temp-file SQLite DB set before any rfp_desk import."""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# File DB so worker threads (asyncio.to_thread, TestClient) see the same data; in-memory is per-connection.
_test_db_file = tempfile.NamedTemporaryFile(suffix=".sqlite", delete=False)
_test_db_file.close()
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_file.name}"
os.environ.setdefault("TRACING_ENABLED", "false")
# Blank mail credentials so no test reaches a real server; load_dotenv does not override them.
for _name in ("SMTP_USER", "SMTP_PASS", "IMAP_USER", "IMAP_PASS"):
    os.environ[_name] = ""
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


@pytest.fixture(autouse=True)
def fresh_tables():
    """Drop and recreate every table before each test."""
    from rfp_desk.db import get_engine
    from rfp_desk.db.base import Base

    engine = get_engine()
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    yield

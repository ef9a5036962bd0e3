"""Database package: engine, session factory, init_db(), get_session()."""

import threading
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from rfp_desk.config import DATABASE_URL
from rfp_desk.db.base import Base

# Import all models so Base.metadata has all tables
from rfp_desk.db.models import EmailRecord, Proposal, Rfp, Vendor  # noqa: F401

_init_lock = threading.Lock()
_engine: Engine | None = None
_SessionLocal: sessionmaker | None = None


def _create_engine() -> Engine:
    """Create engine with check_same_thread=False so IMAP worker threads can share it."""
    url = DATABASE_URL
    if url.startswith("sqlite"):
        if "?" in url:
            url += "&check_same_thread=False"
        else:
            url += "?check_same_thread=False"
    return create_engine(url, echo=False)


def init_db() -> None:
    """Create engine and tables once per process. Existing tables are left untouched."""
    global _engine, _SessionLocal
    with _init_lock:
        if _SessionLocal is not None:
            return
        _engine = _create_engine()
        Base.metadata.create_all(bind=_engine)
        _SessionLocal = sessionmaker(bind=_engine, autocommit=False, autoflush=False)


def get_engine() -> Engine:
    """Return the process engine, initializing the database on first use."""
    init_db()
    return _engine


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """Context manager yielding a DB session. Calls init_db() on first use."""
    init_db()
    session = _SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

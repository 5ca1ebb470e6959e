"""
Engine and session plumbing.

One engine per process, built lazily from DATABASE_URL. Routes receive a
session through the get_db dependency; scripts open their own from
get_session_factory().
"""

import logging
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool

from app.core.config import get_settings
from app.core.models import Base

logger = logging.getLogger(__name__)

_engine = None
_SessionLocal = None


def get_engine():
    """
    Return the process-wide engine, building it on first use.

    Server databases get a small pre-pinged QueuePool. SQLite URLs are opened
    with check_same_thread off because sync routes run on a worker thread.
    """
    global _engine
    if _engine is not None:
        return _engine

    url = get_settings().database_url
    if url.startswith("sqlite"):
        _engine = create_engine(url, connect_args={"check_same_thread": False})
    else:
        _engine = create_engine(
            url,
            poolclass=QueuePool,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
        )
    logger.debug(f"Database engine created for {_engine.url.get_backend_name()}")
    return _engine


def reset_engine() -> None:
    """Drop the cached engine; the next get_engine() reads settings again."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


def create_tables(engine=None) -> None:
    """Create any missing tables. Existing tables are left alone."""
    engine = engine or get_engine()
    logger.info("Ensuring database tables exist")
    Base.metadata.create_all(bind=engine)


def get_session_factory():
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=get_engine())
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding a session that is closed after the request."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def check_connection() -> None:
    """Run SELECT 1; raises if the database cannot be reached."""
    with get_engine().connect() as conn:
        conn.execute(text("SELECT 1"))

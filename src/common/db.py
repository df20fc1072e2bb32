"""Database connection helpers for the hosted Postgres instance."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session


def create_db_engine(database_url: str) -> Engine:
    """Create an engine from a SQLAlchemy database URL."""
    return create_engine(database_url, pool_pre_ping=True)


@contextmanager
def get_session(database_url: str) -> Iterator[Session]:
    """Context manager yielding a session; uncommitted work is rolled back on exit."""
    engine = create_db_engine(database_url)
    session = Session(engine)
    try:
        yield session
    finally:
        session.close()
        engine.dispose()

"""
Database utilities for initializing SQLAlchemy sessions and metadata.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, scoped_session, sessionmaker

from .config import get_settings


settings = get_settings()
engine = create_engine(settings.database_url, echo=settings.debug)
SessionLocal = scoped_session(
    sessionmaker(bind=engine, autoflush=False)
)


def make_session_factory(bind: Engine) -> sessionmaker:
    """Build a session factory for an engine other than the default one."""
    return sessionmaker(bind=bind, autoflush=False)


@contextmanager
def session_scope(
    factory: Optional[Callable[[], Session]] = None,
) -> Iterator[Session]:
    """
    Provide a transactional scope around a series of operations.
    """
    session = (factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = ["engine", "SessionLocal", "make_session_factory", "session_scope"]

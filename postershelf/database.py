"""Database configuration, session management and transaction boundary."""

import logging
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from postershelf.config import get_settings
from postershelf.errors import classify_db_error

logger = logging.getLogger(__name__)

settings = get_settings()


def make_engine(url: str) -> Engine:
    """Create an engine for the given URL."""
    if url.startswith("sqlite"):
        engine = create_engine(url, connect_args={"check_same_thread": False})
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


engine = make_engine(settings.database_url)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session, duplicate_message: str | None = None) -> Iterator[Session]:
    """Run a unit of work and commit it, rolling back on any failure.

    Driver errors are classified into domain errors here so callers never
    see raw SQLAlchemy exceptions. Domain errors raised inside the block
    propagate unchanged after the rollback.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        error = classify_db_error(e, duplicate_message)
        logger.error(f"Transaction rolled back ({error.kind.value}): {e}")
        raise error from e
    except Exception:
        db.rollback()
        raise

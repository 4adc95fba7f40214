"""
Database handle (engine + session factory) passed explicitly to services.

One `Database` is created by the application factory and stored on `app.state.db`;
tests build their own against in-memory SQLite.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session, sessionmaker

from registry.config import Settings
from registry.errors import DependencyUnavailableError

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """SQLAlchemy engine and session factory for one database URL."""

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        self.url = url
        self.engine: Engine = create_engine(url, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            # ON DELETE CASCADE on usage logs and labels needs this on SQLite
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        self._session_factory: sessionmaker[Session] = sessionmaker(
            self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> Database | None:
        """Build from DATABASE_URL, or return None if the database is not configured."""
        if not settings.database_configured:
            return None
        url = settings.get_database_url()
        if url.startswith("sqlite"):
            return cls(url, connect_args={"check_same_thread": False})
        return cls(
            url,
            pool_pre_ping=True,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            connect_args={"connect_timeout": settings.database_connect_timeout},
        )

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """Context manager for a DB session: commit on success, rollback on error.

        Connection-level failures are re-raised as DependencyUnavailableError.
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except (OperationalError, InterfaceError) as e:
            session.rollback()
            logger.warning("Database unavailable: %s", e)
            raise DependencyUnavailableError("Database is unavailable") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def create_all(self) -> None:
        """Create all tables (dev and tests; production uses Alembic)."""
        from registry.models import Base

        Base.metadata.create_all(self.engine)

    def check_connection(self) -> bool:
        """Return True if a test query succeeds."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database connection check failed: %s", e)
            return False

    def dispose(self) -> None:
        self.engine.dispose()

"""Database configuration and session management."""

import logging
from collections.abc import Generator
from typing import Any

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

Base: Any = declarative_base()


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record) -> None:
    """Turn on FK enforcement so ON DELETE CASCADE works on SQLite.

    SQLite PRAGMAs are per-connection, so this runs on every new pool connection.
    """
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the engine and session factory for one application instance.

    Usage:
        database = Database(settings.database_url)
        database.open()
        with database.session() as db:
            ...
        database.close()
    """

    def __init__(self, url: str):
        self.url = url
        self.engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    def open(self) -> None:
        """Create the engine and make sure the schema exists."""
        if self.engine is not None:
            return

        if self.is_sqlite:
            self.engine = create_engine(self.url, connect_args={"check_same_thread": False})
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)
        else:
            self.engine = create_engine(
                self.url,
                pool_pre_ping=True,
                pool_size=5,
                max_overflow=10,
            )

        self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.create_all()
        logger.info(f"Database opened ({self.engine.dialect.name})")

    def close(self) -> None:
        """Dispose of the connection pool."""
        if self.engine is None:
            return
        self.engine.dispose()
        self.engine = None
        self._session_factory = None
        logger.info("Database closed")

    def create_all(self) -> None:
        """Create all tables registered on Base.metadata."""
        # Import all models here so they are registered with Base.metadata
        from src import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        """Return a new ORM session bound to this database."""
        if self._session_factory is None:
            raise RuntimeError("Database is not open")
        return self._session_factory()


def get_db(request: Request) -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()

"""Database connection management for the job queue.

Handles SQLite (development) and PostgreSQL (production) backends
with appropriate settings for each.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Self

from sqlalchemy import Connection, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from armory.core.jobs.schema import metadata


class JobsDB:
    """Job queue database connection manager."""

    def __init__(self, engine: Engine, connection_string: str) -> None:
        self.connection_string = connection_string
        self._engine: Engine | None = engine

    @staticmethod
    def _configure_sqlite(engine: Engine) -> None:
        """Configure SQLite engine for reliability.

        Registers a connection event hook that sets
        PRAGMA journal_mode=WAL for concurrent readers.
        """

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection: object, connection_record: object) -> None:
            cursor = dbapi_connection.cursor()  # type: ignore[attr-defined]
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    @property
    def engine(self) -> Engine:
        """Get the SQLAlchemy engine."""
        if self._engine is None:
            raise RuntimeError("Database not initialized")
        return self._engine

    def close(self) -> None:
        """Close database connection."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.close()

    @classmethod
    def in_memory(cls) -> Self:
        """Create an in-memory SQLite database for testing.

        A single shared connection keeps the data visible across threads
        (the web test client runs handlers in a worker thread).
        """
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        metadata.create_all(engine)
        return cls(engine, "sqlite://")

    @classmethod
    def from_url(cls, url: str, *, echo: bool = False, create_tables: bool = True) -> Self:
        """Create database from connection URL.

        Args:
            url: SQLAlchemy connection URL
            echo: Log every SQL statement
            create_tables: Whether to create tables if they don't exist

        Returns:
            JobsDB instance
        """
        engine = create_engine(url, echo=echo)
        if url.startswith("sqlite"):
            cls._configure_sqlite(engine)
        if create_tables:
            metadata.create_all(engine)
        return cls(engine, url)

    @contextmanager
    def connection(self) -> Iterator[Connection]:
        """Get a database connection with automatic transaction handling.

        Auto-commits on successful block exit, rolls back on exception.
        """
        with self.engine.begin() as conn:
            yield conn

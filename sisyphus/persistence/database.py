"""Database engine and transaction management."""

import logging
import threading
from contextlib import contextmanager, nullcontext
from pathlib import Path
from typing import Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from sisyphus.config import DEFAULT_DATABASE_ECHO, DEFAULT_DATABASE_URL
from sisyphus.persistence.tables import Base

logger = logging.getLogger(__name__.split(".")[-1])

# Seconds a writer waits for the SQLite write lock before failing
SQLITE_BUSY_TIMEOUT = 30


def _on_sqlite_connect(dbapi_connection, connection_record) -> None:
    # Let SQLAlchemy emit BEGIN itself instead of the driver deferring it to the first write
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _on_sqlite_begin(connection) -> None:
    # Take the write lock before the first read so same-player transitions run one at a time
    connection.exec_driver_sql("BEGIN IMMEDIATE")


def _is_memory_database(database) -> bool:
    return database in (None, "", ":memory:")


class Database:
    """Owns the SQLAlchemy engine and hands out transactional sessions."""

    def __init__(self, url: str = DEFAULT_DATABASE_URL, echo: bool = DEFAULT_DATABASE_ECHO) -> None:
        """
        Initialize database.

        An in-memory SQLite URL keeps a single shared connection, so its
        transactions are serialized in process. Meant for tests.

        Args:
            url: SQLAlchemy database URL
            echo: Whether to log emitted SQL
        """
        self.url = url
        parsed = make_url(url)
        self.is_memory = parsed.get_backend_name() == "sqlite" and _is_memory_database(parsed.database)
        self.engine = self._create_engine(url, echo)
        self._sessionmaker = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self._memory_lock = threading.RLock() if self.is_memory else None

    @staticmethod
    def _create_engine(url: str, echo: bool) -> Engine:
        parsed = make_url(url)
        if parsed.get_backend_name() != "sqlite":
            return create_engine(url, echo=echo, pool_pre_ping=True)

        kwargs: dict = {
            "echo": echo,
            "connect_args": {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
        }
        if _is_memory_database(parsed.database):
            # Single shared connection, otherwise every session sees an empty database
            kwargs["poolclass"] = StaticPool
        else:
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

        engine = create_engine(url, **kwargs)
        event.listen(engine, "connect", _on_sqlite_connect)
        event.listen(engine, "begin", _on_sqlite_begin)
        return engine

    def create_schema(self) -> None:
        """Create tables and indexes that do not exist yet."""
        with self._memory_lock or nullcontext():
            Base.metadata.create_all(self.engine)
        if self.is_memory:
            logger.warning("Using an in-memory database, data is lost on exit")
        logger.info(f"Database initialized at: {self.engine.url.render_as_string(hide_password=True)}")

    @contextmanager
    def transaction(self) -> Iterator[Session]:
        """
        Open a session inside a single transaction.

        Commits when the block exits normally, rolls back on any exception.
        On SQLite the transaction holds the write lock from its first statement.
        """
        with self._memory_lock or nullcontext():
            with self._sessionmaker.begin() as session:
                yield session

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()

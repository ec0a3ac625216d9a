"""
ORM Manager - Centralized database connection and session management.

Provides singleton access to the database engine with proper session lifecycle.
"""

import logging
import threading
from contextlib import contextmanager, nullcontext
from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine, inspect, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from task_manager_api.config import get_settings
from task_manager_api.database.models.base import Base

logger = logging.getLogger(__name__)

# Module-level singleton
_global_orm_manager: Optional["ORMManager"] = None
_global_lock = threading.Lock()


def get_orm_manager(database_url: Optional[str] = None) -> "ORMManager":
    """
    Get the singleton ORM manager instance.

    Args:
        database_url: Optional SQLAlchemy URL. Uses the configured URL if not provided.

    Returns:
        ORMManager singleton instance.
    """
    global _global_orm_manager

    with _global_lock:
        if _global_orm_manager is None:
            _global_orm_manager = ORMManager(database_url)
        return _global_orm_manager


def reset_orm_manager() -> None:
    """Reset the global ORM manager (for testing)."""
    global _global_orm_manager

    with _global_lock:
        if _global_orm_manager is not None:
            _global_orm_manager.close()
            _global_orm_manager = None


def _is_in_memory_sqlite(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


class ORMManager:
    """
    Centralized ORM manager for database connections.

    Only SQLite is supported. An in-memory URL is served by a single shared
    connection (StaticPool), so sessions on that connection are serialized:
    each one holds a lock from checkout until commit or rollback. File
    databases give each session its own pooled connection and rely on
    SQLite's own locking. The in-memory store disappears when the manager
    is closed.
    """

    def __init__(self, database_url: Optional[str] = None):
        """
        Initialize the ORM manager.

        Args:
            database_url: SQLAlchemy SQLite URL. Uses the configured URL if not provided.

        Raises:
            ValueError: The URL names a backend other than SQLite.
        """
        self.database_url = database_url or get_settings().database_url
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._session_lock: Optional[threading.RLock] = None

        # Initialize engine and create tables
        self._initialize()

    def _initialize(self) -> None:
        """Initialize the database engine and create tables."""
        backend = make_url(self.database_url).get_backend_name()
        if backend != "sqlite":
            raise ValueError(f"Unsupported database backend {backend!r}; only sqlite is supported")

        engine_kwargs: Dict[str, Any] = {
            "echo": False,
            "connect_args": {"check_same_thread": False},
        }
        if _is_in_memory_sqlite(self.database_url):
            engine_kwargs["poolclass"] = StaticPool
            self._session_lock = threading.RLock()

        self._engine = create_engine(self.database_url, **engine_kwargs)

        self._session_factory = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=True,
            expire_on_commit=False,
        )

        Base.metadata.create_all(self._engine)
        logger.debug("Database ready at %s", self._engine.url.render_as_string(hide_password=True))

    @property
    def engine(self) -> Engine:
        """Get the SQLAlchemy engine."""
        if self._engine is None:
            raise RuntimeError("ORM Manager not initialized")
        return self._engine

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session with automatic commit/rollback.

        Usage:
            with orm_manager.get_session() as session:
                session.add(TaskItem(title="Test", due_date=now))
                # Auto-commit on successful exit
                # Auto-rollback on exception
        """
        if self._session_factory is None:
            raise RuntimeError("ORM Manager not initialized")

        with self._session_lock or nullcontext():
            session = self._session_factory()
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    def perform_health_check(self) -> Dict[str, Any]:
        """
        Perform a database health check.

        Returns:
            Dictionary with health check results.
        """
        try:
            with self.get_session() as session:
                result = session.execute(text("SELECT 1")).scalar()
                if result != 1:
                    return {"healthy": False, "error": "Basic query failed"}
                table_names = inspect(session.connection()).get_table_names()

            return {
                "healthy": True,
                "database_url": self.engine.url.render_as_string(hide_password=True),
                "tables": table_names,
                "table_count": len(table_names),
            }
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            return {"healthy": False, "error": str(e)}

    def close(self) -> None:
        """Close the database engine and release resources."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None

    def __del__(self) -> None:
        """Cleanup on deletion."""
        self.close()

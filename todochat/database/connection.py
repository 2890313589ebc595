"""
Database Connection Management.

This module wraps a SQLAlchemy engine and session factory.
It provides:
- Connection pooling (server databases)
- Session management
- Table creation
- Health checks
"""
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError

from todochat.core.config import get_settings
from todochat.core.exceptions import DatabaseError
from todochat.core.logging_config import get_logger
from todochat.database.models import Base

logger = get_logger(__name__)


class DatabaseConnection:
    """
    Manages database connections and session lifecycle.

    Example:
        >>> db = DatabaseConnection("sqlite:///todos.db")
        >>> with db.get_session() as session:
        ...     result = session.execute(text("SELECT 1"))
    """

    def __init__(self, connection_url: Optional[str] = None):
        """
        Initialize database engine.

        Args:
            connection_url: Optional connection URL. If not provided, uses settings.
        """
        db_url = connection_url or get_settings().database_url

        try:
            self.url = make_url(db_url)

            # SQLite picks its own pool class, which does not take sizing options
            engine_options = {"echo": False}
            if self.url.get_backend_name() != "sqlite":
                engine_options.update(pool_pre_ping=True, pool_size=5, max_overflow=10)

            self.engine = create_engine(db_url, **engine_options)
        except ImportError as e:
            # create_engine imports the DBAPI driver named in the URL
            logger.error(f"Database driver not installed: {e}")
            raise DatabaseError("Database driver not installed", details=str(e)) from e
        except (SQLAlchemyError, ValueError) as e:
            logger.error(f"Invalid database URL: {e}")
            raise DatabaseError("Invalid database URL", details=str(e)) from e

        self._session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

        logger.info(f"Database connection initialized: {self.url.render_as_string(hide_password=True)}")

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """
        Get a database session with automatic cleanup.

        Transactions are rolled back on error, committed on success.

        Yields:
            SQLAlchemy Session object
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"Database error, rolling back: {e}")
            raise
        finally:
            session.close()

    def check_connection(self) -> bool:
        """
        Test database connectivity.

        Returns:
            True if connection is healthy, False otherwise.
        """
        try:
            with self.get_session() as session:
                session.execute(text("SELECT 1"))
            logger.debug("Database connection check: OK")
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    def create_tables(self) -> None:
        """Create the to-do table if it doesn't exist."""
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create tables: {e}")
            raise DatabaseError("Failed to create tables", details=str(e)) from e
        logger.info("To-do tables initialized")

    def drop_tables(self) -> None:
        """Drop the to-do table (use with caution!)."""
        try:
            Base.metadata.drop_all(self.engine)
        except SQLAlchemyError as e:
            logger.error(f"Failed to drop tables: {e}")
            raise DatabaseError("Failed to drop tables", details=str(e)) from e
        logger.warning("To-do tables dropped")

    def close(self) -> None:
        """Close all connections in the pool."""
        self.engine.dispose()
        logger.info("Database connections closed")


# Module-level instance (singleton pattern)
_db_connection: Optional[DatabaseConnection] = None


def get_database(connection_url: Optional[str] = None) -> DatabaseConnection:
    """
    Get or create the database connection instance.

    The URL is only used when the instance is first created.

    Returns:
        DatabaseConnection singleton instance
    """
    global _db_connection
    if _db_connection is None:
        _db_connection = DatabaseConnection(connection_url)
    return _db_connection


def reset_database() -> None:
    """Dispose and forget the module-level connection."""
    global _db_connection
    if _db_connection is not None:
        _db_connection.close()
    _db_connection = None

"""
Database engine and session management.

One engine per process, created lazily from ``DATABASE_URL``:
- QueuePool with pre-ping on long-running servers
- NullPool on Vercel, where each invocation opens and closes its own connection

Routes get a request-scoped session from ``get_db_session``; scripts use
``get_db_manager().session()``.
"""

import logging
import os
from contextlib import contextmanager
from typing import Generator, Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool, QueuePool

load_dotenv()

# Models must be imported before create_all
from .models import Base

logger = logging.getLogger(__name__)


class DatabaseConfig:
    """Connection settings read from the environment."""

    def __init__(self):
        self.database_url = os.getenv("DATABASE_URL")
        if not self.database_url:
            raise ValueError("DATABASE_URL is not set")

        self.serverless = bool(os.getenv("VERCEL"))
        self.pool_size = int(os.getenv("DB_POOL_SIZE", "5"))
        self.max_overflow = int(os.getenv("DB_MAX_OVERFLOW", "10"))
        self.pool_timeout = int(os.getenv("DB_POOL_TIMEOUT", "30"))
        self.pool_recycle = int(os.getenv("DB_POOL_RECYCLE", "3600"))
        self.echo = os.getenv("SQL_ECHO", "false").lower() == "true"

    @property
    def host(self) -> str:
        """Host part of the URL, safe to log."""
        return self.database_url.rsplit("@", 1)[-1] if "@" in self.database_url else "(local)"


class DatabaseManager:
    """
    Process-wide engine and session factory.

    Usage:
        with get_db_manager().session() as session:
            session.add(Expense(...))
    """

    _instance: Optional["DatabaseManager"] = None
    _engine: Optional[Engine] = None
    _session_factory: Optional[sessionmaker] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if self._engine is None:
            self._connect(DatabaseConfig())

    def _connect(self, config: DatabaseConfig):
        if config.serverless:
            self._engine = create_engine(config.database_url, poolclass=NullPool, echo=config.echo)
            logger.info("Database: %s with NullPool (serverless)", config.host)
        else:
            self._engine = create_engine(
                config.database_url,
                poolclass=QueuePool,
                pool_size=config.pool_size,
                max_overflow=config.max_overflow,
                pool_timeout=config.pool_timeout,
                pool_recycle=config.pool_recycle,
                pool_pre_ping=True,
                echo=config.echo,
            )
            logger.info(
                "Database: %s with QueuePool (size=%s, overflow=%s)",
                config.host,
                config.pool_size,
                config.max_overflow,
            )
        self._session_factory = sessionmaker(bind=self._engine, expire_on_commit=False)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Session that commits on success and rolls back on any exception."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def get_session(self) -> Session:
        """Bare session; the caller closes it."""
        return self._session_factory()

    def create_all(self):
        Base.metadata.create_all(self._engine)
        logger.info("Database: tables ensured")

    def dispose(self):
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database: connection pool disposed")


def get_db_manager() -> DatabaseManager:
    return DatabaseManager()


def init_db():
    """Create missing tables. Run from the app lifespan outside serverless."""
    get_db_manager().create_all()


def get_db_session() -> Generator[Session, None, None]:
    """
    FastAPI dependency: one session per request.

    Commits after the route returns, rolls back if it raised. Routes that
    need the new row's ID or server defaults commit and refresh themselves.
    """
    session = get_db_manager().get_session()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

"""
Database configuration and session management.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger("macroplate.database")

# Create SQLAlchemy Base
Base = declarative_base()


class Database:
    """
    Owns the engine (connection pool) and the session factory.

    One instance is created per application in the lifespan handler and kept on
    ``app.state.database``; request handlers borrow sessions from it through
    ``get_db_session``.
    """

    def __init__(self, url: str, echo: bool = False, pool_size: int = 5):
        engine_kwargs = {"echo": echo, "future": True}
        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # a single shared connection, otherwise every checkout sees an empty db
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_size"] = pool_size
            engine_kwargs["pool_pre_ping"] = True

        self.url = url
        self.engine = create_engine(url, **engine_kwargs)
        self.session_factory = sessionmaker(
            bind=self.engine, autoflush=False, future=True
        )

    def init_schema(self) -> None:
        """Create any missing tables"""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database tables ensured")

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Session scoped to a block, closed on every exit path"""
        db = self.session_factory()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database connection pool disposed")


def get_db_session(request: Request) -> Iterator[Session]:
    """Get database session (for FastAPI dependency injection)"""
    database: Database = request.app.state.database
    with database.session() as db:
        yield db

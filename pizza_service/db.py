"""
Database connection management.

The application owns exactly one Database handle. It is constructed by
create_app(), opened (tables created) when the app starts, and disposed when
the app shuts down. Route handlers receive sessions through the get_db()
dependency, which reads the handle from app.state.

Usage:
    @router.get("/items")
    def get_items(db: Session = Depends(get_db)):
        ...
"""

import logging
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .models import Base

logger = logging.getLogger(__name__)


class Database:
    """Engine plus session factory for one database URL."""

    def __init__(self, url: str, echo: bool = False, engine: Optional[Engine] = None):
        self.url = url
        self.engine = engine or self._build_engine(url, echo)
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

    @staticmethod
    def _build_engine(url: str, echo: bool) -> Engine:
        if url.startswith("sqlite"):
            kwargs = {"connect_args": {"check_same_thread": False}}
            # In-memory databases vanish with their connection; share one
            if url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool
            return create_engine(url, echo=echo, **kwargs)
        return create_engine(url, pool_pre_ping=True, echo=echo)

    def open(self) -> None:
        """Create any missing tables."""
        Base.metadata.create_all(bind=self.engine)
        logger.info("Database ready (%s)", self.engine.url.render_as_string(hide_password=True))

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Database connections closed")


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency that yields a SQLAlchemy Session."""
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()

"""
Database setup.

Wraps a SQLAlchemy engine and session factory. The default URL is an
in-memory SQLite database, so records live as long as the process.
"""

from contextlib import contextmanager
from typing import Iterator
import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base


logger = logging.getLogger(__name__)


class Database:
    """
    Engine, session factory and schema for the record store.

    Usage:
        db = Database("sqlite:///:memory:")
        with db.session_scope() as session:
            session.add(drug)
    """

    def __init__(self, url: str = "sqlite:///:memory:", echo: bool = False):
        self.url = url
        engine_kwargs = {"echo": echo}

        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            # One shared connection, otherwise each session gets its own empty database
            if ":memory:" in url or url in ("sqlite://", "sqlite:///"):
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(url, **engine_kwargs)
        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

        Base.metadata.create_all(self.engine)
        logger.info(f"Record store ready at {url}")

    def session(self) -> Session:
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope: commit on success, roll back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def reset(self) -> None:
        """Drop and recreate all tables."""
        Base.metadata.drop_all(self.engine)
        Base.metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

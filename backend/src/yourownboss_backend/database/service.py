"""Database session management utilities."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from yourownboss_backend.database.base import BaseSchema
from yourownboss_backend.shared import RequestTimeoutError

logger = logging.getLogger(__name__)

_QUERY_CANCELED = "57014"


def _engine_options(url: str) -> dict[str, Any]:
    """Return engine keyword arguments suited to the target backend."""

    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return {"pool_pre_ping": True}
    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if parsed.database in (None, "", ":memory:"):
        options["poolclass"] = StaticPool
    return options


def _is_statement_timeout(exc: OperationalError) -> bool:
    return getattr(exc.orig, "sqlstate", None) == _QUERY_CANCELED


class DatabaseService:
    """Wraps SQLAlchemy engine and session factory."""

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self._engine = create_engine(url, echo=echo, future=True, **_engine_options(url))
        self._session_factory = sessionmaker(
            bind=self._engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
            class_=Session,
        )

    @property
    def engine(self):  # type: ignore[override]
        """Expose the SQLAlchemy engine."""

        return self._engine

    @property
    def dialect_name(self) -> str:
        return self._engine.dialect.name

    def create_schema(self) -> None:
        """Create every table known to :class:`BaseSchema` if missing."""

        BaseSchema.metadata.create_all(self._engine)
        logger.info("Database schema ensured on %s", self.dialect_name)

    def dispose(self) -> None:
        self._engine.dispose()

    @contextmanager
    def session(self, *, timeout: float | None = None) -> Iterator[Session]:
        """Provide a transactional session scope.

        On PostgreSQL a *timeout* (seconds) bounds every statement of the
        transaction; cancelled statements surface as
        :class:`RequestTimeoutError`.
        """

        session = self._session_factory()
        try:
            if timeout is not None and self.dialect_name == "postgresql":
                session.execute(
                    text("SELECT set_config('statement_timeout', :value, true)"),
                    {"value": f"{max(1, int(timeout * 1000))}ms"},
                )
            yield session
            session.commit()
        except OperationalError as exc:
            session.rollback()
            if _is_statement_timeout(exc):
                raise RequestTimeoutError("Database statement timed out") from exc
            raise
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

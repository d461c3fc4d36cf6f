"""FastAPI dependencies for database access."""

from collections.abc import Iterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from yourownboss_backend.database.service import DatabaseService
from yourownboss_backend.settings import BackendSettings


def get_settings_from_app(request: Request) -> BackendSettings:
    """Return the settings the running application was built with."""
    return request.app.state.settings


SettingsDep = Annotated[BackendSettings, Depends(get_settings_from_app)]


def get_database(request: Request) -> DatabaseService:
    """Return the database service attached to the application."""
    return request.app.state.database


def get_session(
    db: Annotated[DatabaseService, Depends(get_database)],
    settings: SettingsDep,
) -> Iterator[Session]:
    """Yield a SQLAlchemy session managed by :class:`DatabaseService`."""
    with db.session(timeout=settings.request_timeout_seconds) as session:
        yield session

"""YourOwnBoss API entrypoints."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from yourownboss_backend.api import create_api
from yourownboss_backend.api.services import seed_catalog
from yourownboss_backend.database import DatabaseService
from yourownboss_backend.settings import BackendSettings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(config: BackendSettings) -> None:
    logging.basicConfig(level=config.log_level.upper(), format=LOG_FORMAT)


def create_app() -> FastAPI:
    """Application factory used by uvicorn."""
    return create_api(get_settings())


def _run_uvicorn(*, reload: bool) -> None:
    """Start uvicorn with a consistent configuration."""
    config = get_settings()
    configure_logging(config)
    uvicorn.run(
        "yourownboss_backend.main:create_app",
        factory=True,
        host=config.api_host,
        port=config.api_port,
        reload=reload,
        log_level=config.log_level.lower(),
    )


def run_dev() -> None:
    """Run the development ASGI server with auto-reload."""
    _run_uvicorn(reload=True)


def run_prod() -> None:
    """Run the production ASGI server without auto-reload."""
    _run_uvicorn(reload=False)


def run_seed() -> None:
    """Import the catalog files once and exit."""
    config = get_settings()
    configure_logging(config)
    database = DatabaseService(config.database_url, echo=config.database_echo)
    try:
        if config.database_create_schema:
            database.create_schema()
        seed_catalog(database, config)
    finally:
        database.dispose()

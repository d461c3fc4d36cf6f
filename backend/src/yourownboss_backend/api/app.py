"""Factory for constructing the FastAPI application."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from yourownboss_backend.api.errors import register_exception_handlers
from yourownboss_backend.api.routers import (
    auth_router,
    companies_router,
    inventory_router,
    market_router,
    production_router,
    system_router,
)
from yourownboss_backend.api.services import BackendServices, seed_catalog
from yourownboss_backend.database import DatabaseService
from yourownboss_backend.settings import BackendSettings, get_settings

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def _sweep_once(database: DatabaseService, services: BackendServices) -> int:
    with database.session() as session:
        return services.tokens.sweep_expired(session)


async def _sweep_refresh_tokens(
    database: DatabaseService, services: BackendServices, interval: float
) -> None:
    """Periodically delete expired refresh tokens until cancelled."""
    while True:
        await asyncio.sleep(interval)
        try:
            await run_in_threadpool(_sweep_once, database, services)
        except Exception:
            logger.exception("Refresh token sweep failed")


def create_api(
    settings: BackendSettings | None = None,
    database: DatabaseService | None = None,
) -> FastAPI:
    """Instantiate and configure the FastAPI application."""
    settings = settings or get_settings()
    owns_database = database is None
    database = database or DatabaseService(
        settings.database_url, echo=settings.database_echo
    )
    services = BackendServices.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.database_create_schema:
            database.create_schema()
        seed_catalog(database, settings)

        sweeper: asyncio.Task[None] | None = None
        if settings.refresh_token_sweep_interval_seconds > 0:
            sweeper = asyncio.create_task(
                _sweep_refresh_tokens(
                    database, services, settings.refresh_token_sweep_interval_seconds
                )
            )
        logger.info("API ready")
        try:
            yield
        finally:
            if sweeper is not None:
                sweeper.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await sweeper
            if owns_database:
                database.dispose()
            logger.info("API stopped")

    app = FastAPI(title="YourOwnBoss API", lifespan=lifespan)
    app.state.settings = settings
    app.state.database = database
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    for router in (
        auth_router,
        companies_router,
        inventory_router,
        production_router,
        market_router,
        system_router,
    ):
        app.include_router(router, prefix=API_PREFIX)
    return app

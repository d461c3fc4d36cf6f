"""Route definitions for public HTTP endpoints."""

from yourownboss_backend.api.routers.auth import router as auth_router
from yourownboss_backend.api.routers.companies import router as companies_router
from yourownboss_backend.api.routers.inventory import router as inventory_router
from yourownboss_backend.api.routers.market import router as market_router
from yourownboss_backend.api.routers.production import router as production_router
from yourownboss_backend.api.routers.system import router as system_router

__all__ = [
    "auth_router",
    "companies_router",
    "inventory_router",
    "market_router",
    "production_router",
    "system_router",
]

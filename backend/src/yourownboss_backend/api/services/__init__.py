"""Service layer for API-specific business logic."""

from yourownboss_backend.api.services.auth import AccountService, AuthResult
from yourownboss_backend.api.services.catalog import CatalogService
from yourownboss_backend.api.services.company import CompanyService
from yourownboss_backend.api.services.market import MarketEngine, TradeReceipt
from yourownboss_backend.api.services.passwords import PasswordHasher
from yourownboss_backend.api.services.registry import BackendServices
from yourownboss_backend.api.services.seeding import CatalogSeeder, SeedReport, seed_catalog
from yourownboss_backend.api.services.tokens import (
    AccessClaims,
    Identity,
    TokenManager,
    TokenPair,
)

__all__ = [
    "AccessClaims",
    "AccountService",
    "AuthResult",
    "BackendServices",
    "CatalogSeeder",
    "CatalogService",
    "CompanyService",
    "Identity",
    "MarketEngine",
    "PasswordHasher",
    "SeedReport",
    "TokenManager",
    "TokenPair",
    "TradeReceipt",
    "seed_catalog",
]

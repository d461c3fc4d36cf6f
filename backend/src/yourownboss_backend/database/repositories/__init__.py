"""Repository layer translating storage rows and errors into domain terms."""

from yourownboss_backend.database.repositories.catalog import (
    ProductionRepository,
    ResourceRepository,
)
from yourownboss_backend.database.repositories.company import CompanyRepository
from yourownboss_backend.database.repositories.inventory import InventoryRepository
from yourownboss_backend.database.repositories.token import RefreshTokenRepository
from yourownboss_backend.database.repositories.user import UserRepository

__all__ = [
    "CompanyRepository",
    "InventoryRepository",
    "ProductionRepository",
    "RefreshTokenRepository",
    "ResourceRepository",
    "UserRepository",
]

"""Database connectivity helpers and configuration objects."""

from yourownboss_backend.database.base import BaseSchema
from yourownboss_backend.database.dependencies import get_database, get_session
from yourownboss_backend.database.repositories import (
    CompanyRepository,
    InventoryRepository,
    ProductionRepository,
    RefreshTokenRepository,
    ResourceRepository,
    UserRepository,
)
from yourownboss_backend.database.schemas import (
    CompanyInventorySchema,
    CompanySchema,
    ProductionBuildingSchema,
    ProductionProcessResourceSchema,
    ProductionProcessSchema,
    RefreshTokenSchema,
    ResourceSchema,
    UserSchema,
)
from yourownboss_backend.database.service import DatabaseService

__all__ = [
    "BaseSchema",
    "CompanyInventorySchema",
    "CompanyRepository",
    "CompanySchema",
    "DatabaseService",
    "InventoryRepository",
    "ProductionBuildingSchema",
    "ProductionProcessResourceSchema",
    "ProductionProcessSchema",
    "ProductionRepository",
    "RefreshTokenRepository",
    "RefreshTokenSchema",
    "ResourceRepository",
    "ResourceSchema",
    "UserRepository",
    "UserSchema",
    "get_database",
    "get_session",
]

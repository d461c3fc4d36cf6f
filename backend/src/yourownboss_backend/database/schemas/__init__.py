"""SQLAlchemy schemas for every persisted table."""

from yourownboss_backend.database.schemas.catalog import (
    ProductionBuildingSchema,
    ProductionProcessResourceSchema,
    ProductionProcessSchema,
    ResourceSchema,
)
from yourownboss_backend.database.schemas.company import CompanySchema
from yourownboss_backend.database.schemas.inventory import CompanyInventorySchema
from yourownboss_backend.database.schemas.token import RefreshTokenSchema
from yourownboss_backend.database.schemas.user import UserSchema

__all__ = [
    "CompanyInventorySchema",
    "CompanySchema",
    "ProductionBuildingSchema",
    "ProductionProcessResourceSchema",
    "ProductionProcessSchema",
    "RefreshTokenSchema",
    "ResourceSchema",
    "UserSchema",
]

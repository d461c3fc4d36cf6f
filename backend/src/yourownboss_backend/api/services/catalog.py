"""Read-only catalog and inventory queries."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from yourownboss_backend.database import (
    CompanyInventorySchema,
    InventoryRepository,
    ProductionBuildingSchema,
    ProductionRepository,
    ResourceRepository,
    ResourceSchema,
)


class CatalogService:
    def list_resources(self, *, session: Session) -> Sequence[ResourceSchema]:
        return ResourceRepository(session).list_all()

    def list_inventory(
        self, *, session: Session, company_id: int
    ) -> Sequence[CompanyInventorySchema]:
        return InventoryRepository(session).list_for_company(company_id)

    def list_production_buildings(
        self, *, session: Session
    ) -> Sequence[ProductionBuildingSchema]:
        return ProductionRepository(session).list_buildings()

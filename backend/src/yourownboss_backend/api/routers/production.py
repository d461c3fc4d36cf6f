"""Production building catalog endpoint."""

from __future__ import annotations

from fastapi import APIRouter

from yourownboss_backend.api.dependencies import ServicesDep, SessionDep
from yourownboss_backend.api.models import ProductionBuildingResponse

router = APIRouter(tags=["production"])


@router.get("/production-buildings", response_model=list[ProductionBuildingResponse])
def list_production_buildings(
    session: SessionDep, services: ServicesDep
) -> list[ProductionBuildingResponse]:
    buildings = services.catalog.list_production_buildings(session=session)
    return [ProductionBuildingResponse.from_schema(building) for building in buildings]

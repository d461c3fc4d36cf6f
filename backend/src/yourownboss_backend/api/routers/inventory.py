"""Resource catalog and company inventory endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from yourownboss_backend.api.dependencies import IdentityDep, ServicesDep, SessionDep
from yourownboss_backend.api.models import InventoryItemResponse, ResourceResponse

router = APIRouter(tags=["inventory"])


@router.get("/resources", response_model=list[ResourceResponse])
def list_resources(session: SessionDep, services: ServicesDep) -> list[ResourceResponse]:
    resources = services.catalog.list_resources(session=session)
    return [ResourceResponse.model_validate(resource) for resource in resources]


@router.get("/inventory", response_model=list[InventoryItemResponse])
def list_inventory(
    identity: IdentityDep,
    session: SessionDep,
    services: ServicesDep,
) -> list[InventoryItemResponse]:
    """Return the caller's holdings; 404 when they have no company yet."""

    company = services.companies.get_company(session=session, user_id=identity.user_id)
    items = services.catalog.list_inventory(session=session, company_id=company.id)
    return [InventoryItemResponse.from_schema(item) for item in items]

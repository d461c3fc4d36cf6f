"""Company endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from yourownboss_backend.api.dependencies import IdentityDep, ServicesDep, SessionDep
from yourownboss_backend.api.models import CompanyResponse, CreateCompanyRequest

router = APIRouter(prefix="/companies", tags=["companies"])


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
def create_company(
    payload: CreateCompanyRequest,
    identity: IdentityDep,
    session: SessionDep,
    services: ServicesDep,
) -> CompanyResponse:
    """Found the caller's company with the configured starting money."""

    company = services.companies.create_company(
        session=session, user_id=identity.user_id, name=payload.name
    )
    return CompanyResponse.model_validate(company)


@router.get("/me", response_model=CompanyResponse)
def read_my_company(
    identity: IdentityDep,
    session: SessionDep,
    services: ServicesDep,
) -> CompanyResponse:
    company = services.companies.get_company(session=session, user_id=identity.user_id)
    return CompanyResponse.model_validate(company)

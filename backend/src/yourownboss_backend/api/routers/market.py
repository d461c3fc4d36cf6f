"""Market buy/sell endpoints."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, status

from yourownboss_backend.api.dependencies import (
    DeadlineDep,
    IdentityDep,
    ServicesDep,
    SessionDep,
)
from yourownboss_backend.api.models import ErrorResponse, TradeRequest, TradeResponse

router = APIRouter(
    prefix="/market",
    tags=["market"],
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        status.HTTP_504_GATEWAY_TIMEOUT: {"model": ErrorResponse},
    },
)


@router.post("/buy", response_model=TradeResponse)
def buy_resource(
    payload: TradeRequest,
    identity: IdentityDep,
    session: SessionDep,
    services: ServicesDep,
    deadline: DeadlineDep,
) -> TradeResponse:
    company = services.companies.get_company(session=session, user_id=identity.user_id)
    receipt = services.market.buy(
        session=session,
        company_id=company.id,
        resource_id=payload.resource_id,
        pack_count=payload.pack_count,
        deadline=deadline,
    )
    return TradeResponse(message="Resource purchased successfully", **asdict(receipt))


@router.post("/sell", response_model=TradeResponse)
def sell_resource(
    payload: TradeRequest,
    identity: IdentityDep,
    session: SessionDep,
    services: ServicesDep,
    deadline: DeadlineDep,
) -> TradeResponse:
    company = services.companies.get_company(session=session, user_id=identity.user_id)
    receipt = services.market.sell(
        session=session,
        company_id=company.id,
        resource_id=payload.resource_id,
        pack_count=payload.pack_count,
        deadline=deadline,
    )
    return TradeResponse(message="Resource sold successfully", **asdict(receipt))

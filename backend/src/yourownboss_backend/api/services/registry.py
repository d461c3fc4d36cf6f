"""Application-scoped service instances."""

from __future__ import annotations

from dataclasses import dataclass

from yourownboss_backend.api.services.auth import AccountService
from yourownboss_backend.api.services.catalog import CatalogService
from yourownboss_backend.api.services.company import CompanyService
from yourownboss_backend.api.services.market import MarketEngine
from yourownboss_backend.api.services.tokens import TokenManager
from yourownboss_backend.settings import BackendSettings


@dataclass(slots=True)
class BackendServices:
    """Services built once per application from explicit settings."""

    tokens: TokenManager
    accounts: AccountService
    companies: CompanyService
    catalog: CatalogService
    market: MarketEngine

    @classmethod
    def from_settings(cls, settings: BackendSettings) -> BackendServices:
        tokens = TokenManager.from_settings(settings)
        return cls(
            tokens=tokens,
            accounts=AccountService(token_manager=tokens),
            companies=CompanyService(initial_money=settings.initial_company_money),
            catalog=CatalogService(),
            market=MarketEngine(),
        )

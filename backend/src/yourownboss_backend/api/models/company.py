"""Pydantic models for company endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, computed_field

from yourownboss_backend.shared import Money


class CreateCompanyRequest(BaseModel):
    name: str


class CompanyResponse(BaseModel):
    """Company with its balance in thousandths plus a formatted copy."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    money: int
    created_at: datetime
    updated_at: datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def money_display(self) -> str:
        return Money(amount=self.money).display()

"""Pydantic models for market endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TradeRequest(BaseModel):
    """Buy or sell order; the pack count is validated by the market engine."""

    resource_id: int
    pack_count: int


class TradeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    message: str = ""
    company_id: int
    resource_id: int
    pack_count: int
    units: int
    amount: int
    balance: int
    quantity: int

"""Immutable value objects shared across the domain layer."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict

MONEY_SCALE = 1000
_MONEY_QUANTIZE = Decimal("0.001")


class Money(BaseModel):
    """Fixed-point monetary value stored as thousandths of a currency unit."""

    model_config = ConfigDict(frozen=True)

    amount: int = Field(
        ..., description="Monetary amount expressed in thousandths of a unit."
    )

    def to_decimal(self) -> Decimal:
        """Return the amount in whole currency units with three decimals."""
        return (Decimal(self.amount) / MONEY_SCALE).quantize(_MONEY_QUANTIZE)

    def display(self) -> str:
        return f"{self.to_decimal():.3f}"

    def multiply(self, factor: int) -> Money:
        """Scale the amount by an integer *factor* without rounding."""
        return Money(amount=self.amount * factor)


class TimeWindow(BaseModel):
    """Daily activity window of a production process, in whole hours."""

    model_config = ConfigDict(frozen=True)

    start_hour: int = Field(..., ge=0, le=23)
    end_hour: int = Field(..., ge=0, le=23)

    @model_validator(mode="after")
    def _validate_order(self) -> TimeWindow:
        """Ensure the window opens before it closes."""
        if self.start_hour >= self.end_hour:
            msg = "start_hour must be lower than end_hour"
            raise ValueError(msg)
        return self

    @classmethod
    def from_hours(cls, start_hour: int | None, end_hour: int | None) -> TimeWindow | None:
        """Return a window for stored hour columns, or ``None`` when both are empty."""
        if start_hour is None and end_hour is None:
            return None
        if start_hour is None or end_hour is None:
            msg = "Time window hours must be both set or both empty"
            raise ValueError(msg)
        return cls(start_hour=start_hour, end_hour=end_hour)


__all__ = ["MONEY_SCALE", "Money", "TimeWindow"]

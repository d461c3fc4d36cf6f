"""Fixed-price market: moves money and inventory between a company and the market."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.orm import Session

from yourownboss_backend.database import (
    CompanyRepository,
    InventoryRepository,
    ResourceRepository,
)
from yourownboss_backend.shared import (
    Deadline,
    ErrorKind,
    InsufficientFundsError,
    InsufficientStockError,
    InvalidPackCountError,
    Money,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TradeReceipt:
    """Outcome of a completed buy or sell."""

    company_id: int
    resource_id: int
    pack_count: int
    units: int
    amount: int
    balance: int
    quantity: int


def _check(deadline: Deadline | None, step: str) -> None:
    if deadline is not None:
        deadline.check(step)


class MarketEngine:
    """Executes buy and sell orders against the resource price list.

    The money step runs first and the inventory step second. When the
    inventory step fails (including a deadline expiring in between) the money
    step is reversed before the original error propagates. Callers running
    inside a database transaction additionally get a full rollback.
    """

    def buy(
        self,
        *,
        session: Session,
        company_id: int,
        resource_id: int,
        pack_count: int,
        deadline: Deadline | None = None,
    ) -> TradeReceipt:
        if pack_count <= 0:
            raise InvalidPackCountError()

        _check(deadline, "resource lookup")
        resource = ResourceRepository(session).require(resource_id)
        total_cost = Money(amount=resource.price).multiply(pack_count).amount
        total_units = resource.pack_size * pack_count

        ledger = CompanyRepository(session)
        inventory = InventoryRepository(session)

        _check(deadline, "balance check")
        balance = ledger.balance(company_id)
        if balance < total_cost:
            raise InsufficientFundsError()

        _check(deadline, "debit")
        if total_cost > 0:
            balance = ledger.debit(company_id, total_cost)

        try:
            _check(deadline, "inventory update")
            quantity = inventory.add_units(company_id, resource_id, total_units)
        except Exception:
            if total_cost > 0:
                self._compensate(
                    lambda: ledger.credit(company_id, total_cost),
                    f"refund {total_cost} to company {company_id}",
                )
            raise

        logger.info(
            "Company %s bought %d pack(s) of resource %s for %d",
            company_id,
            pack_count,
            resource_id,
            total_cost,
        )
        return TradeReceipt(
            company_id=company_id,
            resource_id=resource_id,
            pack_count=pack_count,
            units=total_units,
            amount=total_cost,
            balance=balance,
            quantity=quantity,
        )

    def sell(
        self,
        *,
        session: Session,
        company_id: int,
        resource_id: int,
        pack_count: int,
        deadline: Deadline | None = None,
    ) -> TradeReceipt:
        if pack_count <= 0:
            raise InvalidPackCountError()

        _check(deadline, "resource lookup")
        resource = ResourceRepository(session).require(resource_id)
        total_revenue = Money(amount=resource.price).multiply(pack_count).amount
        total_units = resource.pack_size * pack_count

        ledger = CompanyRepository(session)
        inventory = InventoryRepository(session)

        _check(deadline, "stock check")
        if inventory.quantity(company_id, resource_id) < total_units:
            raise InsufficientStockError()

        _check(deadline, "credit")
        balance = ledger.balance(company_id)
        if total_revenue > 0:
            balance = ledger.credit(company_id, total_revenue)

        try:
            _check(deadline, "inventory update")
            quantity = inventory.remove_units(company_id, resource_id, total_units)
        except Exception:
            if total_revenue > 0:
                self._compensate(
                    lambda: ledger.debit(company_id, total_revenue),
                    f"take back {total_revenue} from company {company_id}",
                )
            raise

        logger.info(
            "Company %s sold %d pack(s) of resource %s for %d",
            company_id,
            pack_count,
            resource_id,
            total_revenue,
        )
        return TradeReceipt(
            company_id=company_id,
            resource_id=resource_id,
            pack_count=pack_count,
            units=total_units,
            amount=total_revenue,
            balance=balance,
            quantity=quantity,
        )

    @staticmethod
    def _compensate(action: Callable[[], object], description: str) -> None:
        """Run a corrective write; a failure is logged and never replaces the original error."""
        logger.warning("Compensating failed trade: %s", description)
        try:
            action()
        except Exception:
            logger.exception("[%s] compensation failed: %s", ErrorKind.INTERNAL, description)

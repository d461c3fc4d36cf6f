"""Tests for the fixed-price market engine."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from yourownboss_backend.api.services import MarketEngine
from yourownboss_backend.database import (
    CompanyRepository,
    InventoryRepository,
    UserRepository,
    UserSchema,
)
from yourownboss_backend.shared import (
    Deadline,
    InsufficientFundsError,
    InsufficientStockError,
    InvalidPackCountError,
    RequestTimeoutError,
    ResourceNotFoundError,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

STARTING_MONEY = 50_000_000
WOOD = 1


@pytest.fixture
def engine() -> MarketEngine:
    return MarketEngine()


@pytest.fixture
def company_id(seeded_session: Session) -> int:
    user = UserRepository(seeded_session).add(
        UserSchema(username="trader", password_hash="x")
    )
    company = CompanyRepository(seeded_session).create(
        user_id=user.id, name="Acme", initial_money=STARTING_MONEY
    )
    return company.id


class FailingInventoryRepository(InventoryRepository):
    def add_units(self, company_id: int, resource_id: int, units: int) -> int:
        raise RuntimeError("inventory store unavailable")

    def remove_units(self, company_id: int, resource_id: int, units: int) -> int:
        raise RuntimeError("inventory store unavailable")


def test_buy_debits_money_and_adds_units(
    engine: MarketEngine, seeded_session: Session, company_id: int
) -> None:
    receipt = engine.buy(
        session=seeded_session, company_id=company_id, resource_id=WOOD, pack_count=5
    )

    assert receipt.amount == 5_000
    assert receipt.units == 50
    assert receipt.balance == STARTING_MONEY - 5_000
    assert CompanyRepository(seeded_session).balance(company_id) == STARTING_MONEY - 5_000
    assert InventoryRepository(seeded_session).quantity(company_id, WOOD) == 50


def test_buy_then_sell_restores_balance(
    engine: MarketEngine, seeded_session: Session, company_id: int
) -> None:
    engine.buy(session=seeded_session, company_id=company_id, resource_id=WOOD, pack_count=2)
    receipt = engine.sell(
        session=seeded_session, company_id=company_id, resource_id=WOOD, pack_count=2
    )

    assert receipt.balance == STARTING_MONEY
    assert receipt.quantity == 0


def test_buy_with_insufficient_funds_changes_nothing(
    engine: MarketEngine, seeded_session: Session, company_id: int
) -> None:
    with pytest.raises(InsufficientFundsError):
        engine.buy(
            session=seeded_session,
            company_id=company_id,
            resource_id=WOOD,
            pack_count=STARTING_MONEY,
        )

    assert CompanyRepository(seeded_session).balance(company_id) == STARTING_MONEY
    assert InventoryRepository(seeded_session).quantity(company_id, WOOD) == 0


def test_sell_more_than_held_is_rejected(
    engine: MarketEngine, seeded_session: Session, company_id: int
) -> None:
    engine.buy(session=seeded_session, company_id=company_id, resource_id=WOOD, pack_count=1)

    with pytest.raises(InsufficientStockError):
        engine.sell(
            session=seeded_session, company_id=company_id, resource_id=WOOD, pack_count=2
        )

    assert InventoryRepository(seeded_session).quantity(company_id, WOOD) == 10


@pytest.mark.parametrize("pack_count", [0, -3])
def test_pack_count_must_be_positive(
    engine: MarketEngine, seeded_session: Session, company_id: int, pack_count: int
) -> None:
    with pytest.raises(InvalidPackCountError):
        engine.buy(
            session=seeded_session,
            company_id=company_id,
            resource_id=WOOD,
            pack_count=pack_count,
        )


def test_unknown_resource(
    engine: MarketEngine, seeded_session: Session, company_id: int
) -> None:
    with pytest.raises(ResourceNotFoundError):
        engine.sell(
            session=seeded_session, company_id=company_id, resource_id=404, pack_count=1
        )


def test_failed_inventory_step_refunds_buyer(
    engine: MarketEngine,
    seeded_session: Session,
    company_id: int,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setattr(
        "yourownboss_backend.api.services.market.InventoryRepository",
        FailingInventoryRepository,
    )

    with pytest.raises(RuntimeError, match="inventory store unavailable"):
        engine.buy(
            session=seeded_session, company_id=company_id, resource_id=WOOD, pack_count=3
        )

    assert CompanyRepository(seeded_session).balance(company_id) == STARTING_MONEY


def test_failed_inventory_step_takes_back_sale_revenue(
    engine: MarketEngine,
    seeded_session: Session,
    company_id: int,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    InventoryRepository(seeded_session).set_units(company_id, WOOD, 30)
    monkeypatch.setattr(
        "yourownboss_backend.api.services.market.InventoryRepository",
        FailingInventoryRepository,
    )

    with pytest.raises(RuntimeError):
        engine.sell(
            session=seeded_session, company_id=company_id, resource_id=WOOD, pack_count=3
        )

    assert CompanyRepository(seeded_session).balance(company_id) == STARTING_MONEY
    assert InventoryRepository(seeded_session).quantity(company_id, WOOD) == 30


class UnrefundableLedger(CompanyRepository):
    def credit(self, company_id: int, amount: int) -> int:
        raise RuntimeError("ledger unavailable")


def test_failed_refund_is_logged_and_original_error_surfaces(
    engine: MarketEngine,
    seeded_session: Session,
    company_id: int,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setattr(
        "yourownboss_backend.api.services.market.InventoryRepository",
        FailingInventoryRepository,
    )
    monkeypatch.setattr(
        "yourownboss_backend.api.services.market.CompanyRepository",
        UnrefundableLedger,
    )

    with caplog.at_level(logging.WARNING, logger="yourownboss_backend.api.services.market"):
        with pytest.raises(RuntimeError, match="inventory store unavailable"):
            engine.buy(
                session=seeded_session,
                company_id=company_id,
                resource_id=WOOD,
                pack_count=1,
            )

    failures = [record for record in caplog.records if record.levelno == logging.ERROR]
    assert len(failures) == 1
    assert "internal" in failures[0].getMessage()
    assert failures[0].exc_info is not None


def test_expired_deadline_leaves_state_untouched(
    engine: MarketEngine, seeded_session: Session, company_id: int
) -> None:
    expired = Deadline.after(0, clock=lambda: 100.0)

    with pytest.raises(RequestTimeoutError):
        engine.buy(
            session=seeded_session,
            company_id=company_id,
            resource_id=WOOD,
            pack_count=1,
            deadline=expired,
        )

    assert CompanyRepository(seeded_session).balance(company_id) == STARTING_MONEY


def test_deadline_expiring_after_debit_is_compensated(
    engine: MarketEngine, seeded_session: Session, company_id: int
) -> None:
    ticks = iter([0.0, 0.0, 0.0, 10.0])
    deadline = Deadline(expires_at=5.0, clock=lambda: next(ticks, 10.0))

    with pytest.raises(RequestTimeoutError):
        engine.buy(
            session=seeded_session,
            company_id=company_id,
            resource_id=WOOD,
            pack_count=1,
            deadline=deadline,
        )

    assert CompanyRepository(seeded_session).balance(company_id) == STARTING_MONEY
    assert InventoryRepository(seeded_session).quantity(company_id, WOOD) == 0


def test_deadline_expires_at_exact_instant() -> None:
    assert Deadline(expires_at=3.0, clock=lambda: 3.0).expired
    assert not Deadline(expires_at=3.0, clock=lambda: 2.999).expired


def test_buy_until_funds_run_out(engine: MarketEngine, seeded_session: Session) -> None:
    user = UserRepository(seeded_session).add(UserSchema(username="thrifty", password_hash="x"))
    company = CompanyRepository(seeded_session).create(
        user_id=user.id, name="Thrift", initial_money=5_000
    )

    receipt = engine.buy(
        session=seeded_session, company_id=company.id, resource_id=WOOD, pack_count=3
    )
    assert (receipt.balance, receipt.quantity) == (2_000, 30)

    with pytest.raises(InsufficientFundsError):
        engine.buy(
            session=seeded_session, company_id=company.id, resource_id=WOOD, pack_count=10
        )

    assert CompanyRepository(seeded_session).balance(company.id) == 2_000
    assert InventoryRepository(seeded_session).quantity(company.id, WOOD) == 30

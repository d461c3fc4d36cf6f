"""Tests for repository-level money and inventory mutations."""

from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import pytest

from yourownboss_backend.database import (
    CompanyRepository,
    DatabaseService,
    InventoryRepository,
    RefreshTokenRepository,
    ResourceRepository,
    UserRepository,
    UserSchema,
)
from yourownboss_backend.shared import (
    CompanyAlreadyExistsError,
    CompanyNotFoundError,
    InsufficientFundsError,
    InsufficientStockError,
    InvalidAmountError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from sqlalchemy.orm import Session


@pytest.fixture
def user(session: Session) -> UserSchema:
    return UserRepository(session).add(UserSchema(username="owner", password_hash="x"))


@pytest.fixture
def company_id(seeded_session: Session, user: UserSchema) -> int:
    return (
        CompanyRepository(seeded_session)
        .create(user_id=user.id, name="Acme", initial_money=1_000)
        .id
    )


def test_duplicate_username_is_a_conflict(session: Session, user: UserSchema) -> None:
    with pytest.raises(UserAlreadyExistsError):
        UserRepository(session).add(UserSchema(username="owner", password_hash="y"))


def test_require_missing_user(session: Session) -> None:
    with pytest.raises(UserNotFoundError):
        UserRepository(session).require(12345)


def test_one_company_per_user(session: Session, user: UserSchema) -> None:
    repository = CompanyRepository(session)
    repository.create(user_id=user.id, name="Acme", initial_money=0)

    with pytest.raises(CompanyAlreadyExistsError):
        repository.create(user_id=user.id, name="Again", initial_money=0)


def test_debit_is_conditional(seeded_session: Session, company_id: int) -> None:
    ledger = CompanyRepository(seeded_session)

    assert ledger.debit(company_id, 400) == 600
    with pytest.raises(InsufficientFundsError):
        ledger.debit(company_id, 601)
    assert ledger.balance(company_id) == 600
    assert ledger.debit(company_id, 600) == 0


def test_credit_rejects_non_positive_amounts(
    seeded_session: Session, company_id: int
) -> None:
    ledger = CompanyRepository(seeded_session)

    with pytest.raises(InvalidAmountError):
        ledger.credit(company_id, 0)
    with pytest.raises(InvalidAmountError):
        ledger.debit(company_id, -5)


def test_money_ops_on_missing_company(session: Session) -> None:
    ledger = CompanyRepository(session)

    with pytest.raises(CompanyNotFoundError):
        ledger.credit(999, 10)
    with pytest.raises(CompanyNotFoundError):
        ledger.debit(999, 10)
    with pytest.raises(CompanyNotFoundError):
        ledger.balance(999)


def test_balance_reflects_core_update(seeded_session: Session, company_id: int) -> None:
    company = CompanyRepository(seeded_session).get_by_id(company_id)
    assert company is not None

    CompanyRepository(seeded_session).credit(company_id, 500)

    assert company.money == 1_500


def test_add_units_accumulates(seeded_session: Session, company_id: int) -> None:
    inventory = InventoryRepository(seeded_session)

    assert inventory.add_units(company_id, 1, 10) == 10
    assert inventory.add_units(company_id, 1, 5) == 15
    assert inventory.quantity(company_id, 1) == 15


def test_remove_units_never_goes_negative(
    seeded_session: Session, company_id: int
) -> None:
    inventory = InventoryRepository(seeded_session)
    inventory.add_units(company_id, 1, 10)

    with pytest.raises(InsufficientStockError):
        inventory.remove_units(company_id, 1, 11)
    with pytest.raises(InsufficientStockError):
        inventory.remove_units(company_id, 2, 1)
    assert inventory.remove_units(company_id, 1, 10) == 0


def test_list_for_company_orders_by_resource_name(
    seeded_session: Session, company_id: int
) -> None:
    inventory = InventoryRepository(seeded_session)
    inventory.add_units(company_id, 1, 10)
    inventory.set_units(company_id, 2, 3)

    items = inventory.list_for_company(company_id)

    assert [(item.resource.name, item.quantity) for item in items] == [
        ("Stone", 3),
        ("Wood", 10),
    ]


def test_set_units_rejects_negative(seeded_session: Session, company_id: int) -> None:
    with pytest.raises(InvalidAmountError):
        InventoryRepository(seeded_session).set_units(company_id, 1, -1)


def test_refresh_token_usability_window(session: Session, user: UserSchema) -> None:
    repository = RefreshTokenRepository(session)
    now = datetime(2030, 1, 1, tzinfo=UTC)
    repository.add(user_id=user.id, token_hash="a" * 64, expires_at=now + timedelta(hours=1))

    assert repository.find_usable_user_id("a" * 64, now=now) == user.id
    assert repository.find_usable_user_id("a" * 64, now=now + timedelta(hours=1)) is None
    assert repository.revoke("a" * 64, now=now) == 1
    assert repository.revoke("a" * 64, now=now) == 0
    assert repository.find_usable_user_id("a" * 64, now=now) is None


def _run_concurrently(workers: int, action: Callable[[], None]) -> list[bool]:
    """Release *workers* threads at once; record which calls succeeded."""
    barrier = threading.Barrier(workers)
    outcomes: list[bool] = []
    unexpected: list[BaseException] = []
    lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        try:
            action()
        except (InsufficientFundsError, InsufficientStockError):
            succeeded = False
        except Exception as exc:  # noqa: BLE001
            with lock:
                unexpected.append(exc)
            return
        else:
            succeeded = True
        with lock:
            outcomes.append(succeeded)

    threads = [threading.Thread(target=worker) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert unexpected == []
    assert len(outcomes) == workers
    return outcomes


@pytest.fixture
def file_database(tmp_path: Path) -> Iterator[DatabaseService]:
    service = DatabaseService(f"sqlite+pysqlite:///{tmp_path / 'concurrency.db'}")
    service.create_schema()
    yield service
    service.dispose()


@pytest.fixture
def shared_company_id(file_database: DatabaseService) -> int:
    with file_database.session() as session:
        owner = UserRepository(session).add(UserSchema(username="shared", password_hash="x"))
        ResourceRepository(session).upsert(resource_id=1, name="Wood", price=1000, pack_size=10)
        company = CompanyRepository(session).create(
            user_id=owner.id, name="Acme", initial_money=1_000
        )
        InventoryRepository(session).set_units(company.id, 1, 10)
        return company.id


def test_concurrent_debits_never_overdraw(
    file_database: DatabaseService, shared_company_id: int
) -> None:
    def debit() -> None:
        with file_database.session() as session:
            CompanyRepository(session).debit(shared_company_id, 300)

    outcomes = _run_concurrently(8, debit)

    with file_database.session() as session:
        balance = CompanyRepository(session).balance(shared_company_id)
    assert outcomes.count(True) == 3
    assert balance == 1_000 - 300 * outcomes.count(True)
    assert balance >= 0


def test_concurrent_unit_removals_never_go_negative(
    file_database: DatabaseService, shared_company_id: int
) -> None:
    def remove() -> None:
        with file_database.session() as session:
            InventoryRepository(session).remove_units(shared_company_id, 1, 3)

    outcomes = _run_concurrently(8, remove)

    with file_database.session() as session:
        quantity = InventoryRepository(session).quantity(shared_company_id, 1)
    assert outcomes.count(True) == 3
    assert quantity == 10 - 3 * outcomes.count(True)
    assert quantity >= 0

"""Tests for database-level invariants."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import inspect, update
from sqlalchemy.exc import IntegrityError

from yourownboss_backend.database import (
    BaseSchema,
    CompanyRepository,
    CompanySchema,
    ProductionRepository,
    UserRepository,
    UserSchema,
)
from yourownboss_backend.shared import FlowDirection, TimeWindow

if TYPE_CHECKING:
    from sqlalchemy.orm import Session

    from yourownboss_backend.database import DatabaseService


def test_all_tables_are_created(database: DatabaseService) -> None:
    tables = set(inspect(database.engine).get_table_names())

    assert tables == set(BaseSchema.metadata.tables)
    assert {"users", "refresh_tokens", "companies", "company_inventory"} <= tables


def test_money_cannot_go_negative(session: Session) -> None:
    user = UserRepository(session).add(UserSchema(username="broke", password_hash="x"))
    company = CompanyRepository(session).create(
        user_id=user.id, name="Acme", initial_money=0
    )

    with pytest.raises(IntegrityError):
        session.execute(
            update(CompanySchema)
            .where(CompanySchema.id == company.id)
            .values(money=-1)
            .execution_options(synchronize_session=False)
        )
    session.rollback()


def test_flow_is_unique_per_direction(seeded_session: Session) -> None:
    repository = ProductionRepository(seeded_session)
    repository.upsert_building(building_id=1, name="Sawmill", cost=0)
    repository.upsert_process(
        process_id=1,
        building_id=1,
        name="Cut",
        processing_time_ms=100,
        window=TimeWindow(start_hour=0, end_hour=23),
    )
    repository.upsert_flow(
        process_id=1, resource_id=1, direction=FlowDirection.INPUT, quantity=1
    )
    repository.upsert_flow(
        process_id=1, resource_id=1, direction=FlowDirection.OUTPUT, quantity=1
    )
    repository.upsert_flow(
        process_id=1, resource_id=1, direction=FlowDirection.INPUT, quantity=4
    )

    flows = repository.list_flows(1)
    assert sorted((flow.direction.value, flow.quantity) for flow in flows) == [
        ("input", 4),
        ("output", 1),
    ]

"""Test configuration and fixtures for the backend test suite."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from yourownboss_backend.api import create_api
from yourownboss_backend.database import DatabaseService, ResourceRepository
from yourownboss_backend.settings import BackendSettings, get_settings

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path

    from sqlalchemy.orm import Session

TEST_SECRET = "test-secret-key"  # noqa: S105

RESOURCES = [
    {"id": 1, "name": "Wood", "price": 1000, "pack_size": 10},
    {"id": 2, "name": "Stone", "price": 2500, "pack_size": 5},
]

BUILDINGS = [
    {
        "id": 1,
        "name": "Sawmill",
        "cost": 500000,
        "processes": [
            {
                "id": 1,
                "name": "Cut planks",
                "processing_time_ms": 5000,
                "time_window": {"start_hour": 8, "end_hour": 18},
                "resources": [
                    {"resource_id": 1, "direction": "input", "quantity": 2},
                    {"resource_id": 2, "direction": "output", "quantity": 1},
                ],
            }
        ],
    }
]


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure settings are loaded with predictable values during tests."""
    monkeypatch.setenv("AUTH_SECRET_KEY", TEST_SECRET)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def catalog_files(tmp_path: Path) -> tuple[Path, Path]:
    resources = tmp_path / "resources.json"
    buildings = tmp_path / "production_buildings.json"
    resources.write_text(json.dumps(RESOURCES), encoding="utf-8")
    buildings.write_text(json.dumps(BUILDINGS), encoding="utf-8")
    return resources, buildings


@pytest.fixture
def settings(catalog_files: tuple[Path, Path]) -> BackendSettings:
    resources, buildings = catalog_files
    return BackendSettings(
        _env_file=None,
        auth_secret_key=TEST_SECRET,
        database_url="sqlite+pysqlite:///:memory:",
        database_create_schema=True,
        refresh_token_sweep_interval_seconds=0,
        initial_company_money=50_000_000,
        resources_file=str(resources),
        production_buildings_file=str(buildings),
    )


@pytest.fixture
def database() -> Iterator[DatabaseService]:
    service = DatabaseService("sqlite+pysqlite:///:memory:")
    service.create_schema()
    yield service
    service.dispose()


@pytest.fixture
def session(database: DatabaseService) -> Iterator[Session]:
    with database.session() as db_session:
        yield db_session


@pytest.fixture
def seeded_session(session: Session) -> Session:
    """Session with the two test resources present."""
    repository = ResourceRepository(session)
    for resource in RESOURCES:
        repository.upsert(
            resource_id=resource["id"],
            name=resource["name"],
            price=resource["price"],
            pack_size=resource["pack_size"],
        )
    session.flush()
    return session


@pytest.fixture
def client(settings: BackendSettings, database: DatabaseService) -> Iterator[TestClient]:
    app = create_api(settings, database)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., dict]:
    """Register a user through the API; the client keeps the session cookies."""

    def _register(username: str = "PlayerOne", password: str = "Password123") -> dict:
        response = client.post(
            "/api/auth/register", json={"username": username, "password": password}
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register

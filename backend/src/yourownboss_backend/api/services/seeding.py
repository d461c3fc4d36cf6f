"""Startup import of catalog data (resources and production buildings).

Both files are JSON arrays. Entries are upserted by id; malformed entries are
skipped with a warning rather than aborting the import. For every imported
process, resource flows missing from the file are deleted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter, ValidationError
from sqlalchemy.orm import Session

from yourownboss_backend.database import (
    DatabaseService,
    ProductionRepository,
    ResourceRepository,
)
from yourownboss_backend.settings import BackendSettings
from yourownboss_backend.shared import FlowDirection, TimeWindow

logger = logging.getLogger(__name__)


class ResourceSeed(BaseModel):
    id: int
    name: str = ""
    price: int = 0
    pack_size: int = 1


class TimeWindowSeed(BaseModel):
    start_hour: int
    end_hour: int


class ProcessResourceSeed(BaseModel):
    resource_id: int
    direction: str
    quantity: int


class ProcessSeed(BaseModel):
    id: int
    name: str = ""
    processing_time_ms: int = 0
    time_window: TimeWindowSeed | None = None
    resources: list[ProcessResourceSeed] = Field(default_factory=list)


class BuildingSeed(BaseModel):
    id: int
    name: str = ""
    cost: int = 0
    processes: list[ProcessSeed] = Field(default_factory=list)


_RESOURCES = TypeAdapter(list[ResourceSeed])
_BUILDINGS = TypeAdapter(list[BuildingSeed])


@dataclass(slots=True)
class SeedReport:
    """Row counts touched by an import run."""

    resources_created: int = 0
    resources_updated: int = 0
    buildings_created: int = 0
    buildings_updated: int = 0
    processes_created: int = 0
    processes_updated: int = 0
    flows_created: int = 0
    flows_updated: int = 0
    flows_deleted: int = 0
    skipped: int = 0

    def log(self) -> None:
        for label, count in (
            ("Resources loaded", self.resources_created),
            ("Resources updated", self.resources_updated),
            ("Production buildings loaded", self.buildings_created),
            ("Production buildings updated", self.buildings_updated),
            ("Production processes loaded", self.processes_created),
            ("Production processes updated", self.processes_updated),
            ("Production process resources loaded", self.flows_created),
            ("Production process resources updated", self.flows_updated),
            ("Production process resources removed", self.flows_deleted),
            ("Catalog entries skipped", self.skipped),
        ):
            if count:
                logger.info("%s: %d", label, count)


class CatalogSeeder:
    """Upserts catalog files into the database within one session."""

    def __init__(self, session: Session) -> None:
        self._resources = ResourceRepository(session)
        self._production = ProductionRepository(session)

    def seed_resources(self, payload: bytes | str, report: SeedReport) -> None:
        for seed in _RESOURCES.validate_json(payload):
            if seed.id <= 0 or not seed.name:
                logger.warning("Skipping resource entry %s: missing id or name", seed.id)
                report.skipped += 1
                continue
            pack_size = seed.pack_size if seed.pack_size > 0 else 1
            created = self._resources.upsert(
                resource_id=seed.id, name=seed.name, price=seed.price, pack_size=pack_size
            )
            if created:
                report.resources_created += 1
            else:
                report.resources_updated += 1

    def seed_production_buildings(self, payload: bytes | str, report: SeedReport) -> None:
        for seed in _BUILDINGS.validate_json(payload):
            if seed.id <= 0 or not seed.name:
                logger.warning("Skipping building entry %s: missing id or name", seed.id)
                report.skipped += 1
                continue
            created = self._production.upsert_building(
                building_id=seed.id, name=seed.name, cost=seed.cost
            )
            if created:
                report.buildings_created += 1
            else:
                report.buildings_updated += 1
            for process in seed.processes:
                self._seed_process(seed.id, process, report)

    def _seed_process(self, building_id: int, seed: ProcessSeed, report: SeedReport) -> None:
        if seed.id <= 0 or not seed.name or seed.processing_time_ms <= 0:
            logger.warning("Skipping process entry %s: incomplete definition", seed.id)
            report.skipped += 1
            return
        try:
            window = (
                TimeWindow(
                    start_hour=seed.time_window.start_hour,
                    end_hour=seed.time_window.end_hour,
                )
                if seed.time_window is not None
                else None
            )
        except ValidationError:
            logger.warning("Skipping process %s: invalid time window", seed.id)
            report.skipped += 1
            return

        created = self._production.upsert_process(
            process_id=seed.id,
            building_id=building_id,
            name=seed.name,
            processing_time_ms=seed.processing_time_ms,
            window=window,
        )
        if created:
            report.processes_created += 1
        else:
            report.processes_updated += 1

        existing = {
            (flow.resource_id, flow.direction): flow.quantity
            for flow in self._production.list_flows(seed.id)
        }
        seen: set[tuple[int, FlowDirection]] = set()
        for flow in seed.resources:
            try:
                direction = FlowDirection(flow.direction)
            except ValueError:
                direction = None
            if flow.resource_id <= 0 or flow.quantity <= 0 or direction is None:
                logger.warning("Skipping invalid resource flow on process %s", seed.id)
                report.skipped += 1
                continue
            if self._resources.get_by_id(flow.resource_id) is None:
                logger.warning(
                    "Skipping flow on process %s: unknown resource %s",
                    seed.id,
                    flow.resource_id,
                )
                report.skipped += 1
                continue

            key = (flow.resource_id, direction)
            if key not in existing:
                report.flows_created += 1
            elif existing[key] != flow.quantity:
                report.flows_updated += 1
            self._production.upsert_flow(
                process_id=seed.id,
                resource_id=flow.resource_id,
                direction=direction,
                quantity=flow.quantity,
            )
            seen.add(key)

        for resource_id, direction in existing.keys() - seen:
            self._production.delete_flow(
                process_id=seed.id, resource_id=resource_id, direction=direction
            )
            report.flows_deleted += 1


def _read(path: Path) -> bytes | None:
    if not path.is_file():
        logger.warning("Catalog file %s not found, skipping", path)
        return None
    return path.read_bytes()


def seed_catalog(database: DatabaseService, settings: BackendSettings) -> SeedReport:
    """Import the configured catalog files; unreadable files are skipped."""

    report = SeedReport()
    with database.session() as session:
        seeder = CatalogSeeder(session)
        resources = _read(Path(settings.resources_file))
        if resources is not None:
            try:
                seeder.seed_resources(resources, report)
            except ValidationError as exc:
                logger.warning("Failed to load resources: %s", exc)
        buildings = _read(Path(settings.production_buildings_file))
        if buildings is not None:
            try:
                seeder.seed_production_buildings(buildings, report)
            except ValidationError as exc:
                logger.warning("Failed to load production buildings: %s", exc)
    report.log()
    return report


__all__ = ["CatalogSeeder", "SeedReport", "seed_catalog"]

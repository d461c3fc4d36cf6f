"""Repositories for the seeded catalog: resources and production buildings."""

from collections.abc import Sequence

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from yourownboss_backend.database.schemas import (
    ProductionBuildingSchema,
    ProductionProcessResourceSchema,
    ProductionProcessSchema,
    ResourceSchema,
)
from yourownboss_backend.shared import FlowDirection, ResourceNotFoundError, TimeWindow


class ResourceRepository:
    """Encapsulates persistence operations for :class:`ResourceSchema`."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, resource_id: int) -> ResourceSchema | None:
        return self._session.get(ResourceSchema, resource_id)

    def require(self, resource_id: int) -> ResourceSchema:
        resource = self.get_by_id(resource_id)
        if resource is None:
            raise ResourceNotFoundError()
        return resource

    def list_all(self) -> Sequence[ResourceSchema]:
        return self._session.scalars(select(ResourceSchema).order_by(ResourceSchema.id)).all()

    def upsert(self, *, resource_id: int, name: str, price: int, pack_size: int) -> bool:
        """Create or update a resource by id; return ``True`` when it was created."""
        resource = self.get_by_id(resource_id)
        created = resource is None
        if resource is None:
            resource = ResourceSchema(id=resource_id)
            self._session.add(resource)
        resource.name = name
        resource.price = price
        resource.pack_size = pack_size
        self._session.flush()
        return created


class ProductionRepository:
    """Buildings, their processes and the resource flows of each process."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_buildings(self) -> Sequence[ProductionBuildingSchema]:
        """Return every building with processes and flows eagerly loaded."""
        stmt = (
            select(ProductionBuildingSchema)
            .options(
                selectinload(ProductionBuildingSchema.processes)
                .selectinload(ProductionProcessSchema.resources)
                .selectinload(ProductionProcessResourceSchema.resource)
            )
            .order_by(ProductionBuildingSchema.id)
        )
        return self._session.scalars(stmt).all()

    def upsert_building(self, *, building_id: int, name: str, cost: int) -> bool:
        building = self._session.get(ProductionBuildingSchema, building_id)
        created = building is None
        if building is None:
            building = ProductionBuildingSchema(id=building_id)
            self._session.add(building)
        building.name = name
        building.cost = cost
        self._session.flush()
        return created

    def upsert_process(
        self,
        *,
        process_id: int,
        building_id: int,
        name: str,
        processing_time_ms: int,
        window: TimeWindow | None,
    ) -> bool:
        process = self._session.get(ProductionProcessSchema, process_id)
        created = process is None
        if process is None:
            process = ProductionProcessSchema(id=process_id)
            self._session.add(process)
        process.building_id = building_id
        process.name = name
        process.processing_time_ms = processing_time_ms
        process.window_start_hour = window.start_hour if window else None
        process.window_end_hour = window.end_hour if window else None
        self._session.flush()
        return created

    def list_flows(self, process_id: int) -> Sequence[ProductionProcessResourceSchema]:
        stmt = select(ProductionProcessResourceSchema).where(
            ProductionProcessResourceSchema.process_id == process_id
        )
        return self._session.scalars(stmt).all()

    def upsert_flow(
        self,
        *,
        process_id: int,
        resource_id: int,
        direction: FlowDirection,
        quantity: int,
    ) -> None:
        stmt = select(ProductionProcessResourceSchema).where(
            ProductionProcessResourceSchema.process_id == process_id,
            ProductionProcessResourceSchema.resource_id == resource_id,
            ProductionProcessResourceSchema.direction == direction,
        )
        flow = self._session.scalar(stmt)
        if flow is None:
            flow = ProductionProcessResourceSchema(
                process_id=process_id, resource_id=resource_id, direction=direction
            )
            self._session.add(flow)
        flow.quantity = quantity
        self._session.flush()

    def delete_flow(
        self, *, process_id: int, resource_id: int, direction: FlowDirection
    ) -> None:
        stmt = (
            delete(ProductionProcessResourceSchema)
            .where(
                ProductionProcessResourceSchema.process_id == process_id,
                ProductionProcessResourceSchema.resource_id == resource_id,
                ProductionProcessResourceSchema.direction == direction,
            )
            .execution_options(synchronize_session="fetch")
        )
        self._session.execute(stmt)

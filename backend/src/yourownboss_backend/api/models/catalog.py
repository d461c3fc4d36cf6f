"""Pydantic models for resources, inventory and production buildings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from yourownboss_backend.database import (
    CompanyInventorySchema,
    ProductionBuildingSchema,
    ProductionProcessSchema,
)
from yourownboss_backend.shared import FlowDirection, TimeWindow


class ResourceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: int
    pack_size: int


class InventoryItemResponse(BaseModel):
    """Held quantity (in units) together with the resource's pack pricing."""

    id: int
    resource_id: int
    name: str
    quantity: int
    price: int
    pack_size: int

    @classmethod
    def from_schema(cls, item: CompanyInventorySchema) -> InventoryItemResponse:
        return cls(
            id=item.id,
            resource_id=item.resource_id,
            name=item.resource.name,
            quantity=item.quantity,
            price=item.resource.price,
            pack_size=item.resource.pack_size,
        )


class ProcessResourceResponse(BaseModel):
    resource_id: int
    resource_name: str
    direction: FlowDirection
    quantity: int


class ProductionProcessResponse(BaseModel):
    id: int
    name: str
    processing_time_ms: int
    time_window: TimeWindow | None
    resources: list[ProcessResourceResponse]

    @classmethod
    def from_schema(cls, process: ProductionProcessSchema) -> ProductionProcessResponse:
        return cls(
            id=process.id,
            name=process.name,
            processing_time_ms=process.processing_time_ms,
            time_window=TimeWindow.from_hours(
                process.window_start_hour, process.window_end_hour
            ),
            resources=[
                ProcessResourceResponse(
                    resource_id=flow.resource_id,
                    resource_name=flow.resource.name if flow.resource else "",
                    direction=flow.direction,
                    quantity=flow.quantity,
                )
                for flow in process.resources
            ],
        )


class ProductionBuildingResponse(BaseModel):
    id: int
    name: str
    cost: int
    processes: list[ProductionProcessResponse]

    @classmethod
    def from_schema(cls, building: ProductionBuildingSchema) -> ProductionBuildingResponse:
        return cls(
            id=building.id,
            name=building.name,
            cost=building.cost,
            processes=[
                ProductionProcessResponse.from_schema(process)
                for process in building.processes
            ],
        )

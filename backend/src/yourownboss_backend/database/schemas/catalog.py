"""Catalog schemas: resources and production buildings."""

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from yourownboss_backend.database.base import BaseSchema
from yourownboss_backend.database.schemas.user import IdType
from yourownboss_backend.shared import FlowDirection


class ResourceSchema(BaseSchema):
    """Tradeable resource sold in packs at a fixed price."""

    __tablename__ = "resources"
    __table_args__ = (
        CheckConstraint("pack_size >= 1", name="ck_resources_pack_size_positive"),
        CheckConstraint("price >= 0", name="ck_resources_price_non_negative"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    price: Mapped[int] = mapped_column(BigInteger, nullable=False)
    pack_size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )


class ProductionBuildingSchema(BaseSchema):
    __tablename__ = "production_buildings"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    cost: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)

    processes: Mapped[list["ProductionProcessSchema"]] = relationship(
        back_populates="building",
        order_by="ProductionProcessSchema.id",
        cascade="all, delete-orphan",
    )


class ProductionProcessSchema(BaseSchema):
    """A recipe run inside a building, optionally limited to a daily window."""

    __tablename__ = "production_processes"
    __table_args__ = (
        CheckConstraint(
            "processing_time_ms > 0", name="ck_production_processes_time_positive"
        ),
        CheckConstraint(
            "(window_start_hour IS NULL AND window_end_hour IS NULL) OR "
            "(window_start_hour BETWEEN 0 AND 23 AND window_end_hour BETWEEN 0 AND 23 "
            "AND window_start_hour < window_end_hour)",
            name="ck_production_processes_window",
        ),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=False)
    building_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("production_buildings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    processing_time_ms: Mapped[int] = mapped_column(BigInteger, nullable=False)
    window_start_hour: Mapped[int | None] = mapped_column(Integer, nullable=True)
    window_end_hour: Mapped[int | None] = mapped_column(Integer, nullable=True)

    building: Mapped[ProductionBuildingSchema] = relationship(back_populates="processes")
    resources: Mapped[list["ProductionProcessResourceSchema"]] = relationship(
        back_populates="process",
        order_by="ProductionProcessResourceSchema.resource_id",
        cascade="all, delete-orphan",
    )


class ProductionProcessResourceSchema(BaseSchema):
    """Input or output flow of a resource for a production process."""

    __tablename__ = "production_process_resources"
    __table_args__ = (
        UniqueConstraint(
            "process_id",
            "resource_id",
            "direction",
            name="uq_production_process_resources_flow",
        ),
        CheckConstraint(
            "quantity > 0", name="ck_production_process_resources_quantity"
        ),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    process_id: Mapped[int] = mapped_column(
        IdType,
        ForeignKey("production_processes.id", ondelete="CASCADE"),
        nullable=False,
    )
    resource_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("resources.id", ondelete="CASCADE"), nullable=False
    )
    direction: Mapped[FlowDirection] = mapped_column(
        Enum(
            FlowDirection,
            name="flow_direction",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
    )
    quantity: Mapped[int] = mapped_column(BigInteger, nullable=False)

    process: Mapped[ProductionProcessSchema] = relationship(back_populates="resources")
    resource: Mapped[ResourceSchema] = relationship()

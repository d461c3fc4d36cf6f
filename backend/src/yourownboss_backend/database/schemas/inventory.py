"""Company inventory database schema."""

from datetime import datetime

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from yourownboss_backend.database.base import BaseSchema
from yourownboss_backend.database.schemas.catalog import ResourceSchema
from yourownboss_backend.database.schemas.user import IdType


class CompanyInventorySchema(BaseSchema):
    """Units of one resource held by one company."""

    __tablename__ = "company_inventory"
    __table_args__ = (
        UniqueConstraint(
            "company_id", "resource_id", name="uq_company_inventory_company_resource"
        ),
        CheckConstraint("quantity >= 0", name="ck_company_inventory_quantity"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    company_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False
    )
    resource_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("resources.id", ondelete="CASCADE"), nullable=False
    )
    quantity: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    resource: Mapped[ResourceSchema] = relationship()

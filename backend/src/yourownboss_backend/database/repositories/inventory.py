"""Company inventory persistence."""

from collections.abc import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, joinedload

from yourownboss_backend.database.schemas import CompanyInventorySchema, ResourceSchema
from yourownboss_backend.shared import InsufficientStockError, InvalidAmountError

_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class InventoryRepository:
    """Per-company resource quantities, counted in units rather than packs.

    Every mutation is a single statement so that the database serializes
    concurrent changes to one (company, resource) row and the quantity can
    never drop below zero.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def quantity(self, company_id: int, resource_id: int) -> int:
        """Return the held units, zero when the company never held the resource."""
        stmt = select(CompanyInventorySchema.quantity).where(
            CompanyInventorySchema.company_id == company_id,
            CompanyInventorySchema.resource_id == resource_id,
        )
        return self._session.scalar(stmt) or 0

    def list_for_company(self, company_id: int) -> Sequence[CompanyInventorySchema]:
        stmt = (
            select(CompanyInventorySchema)
            .join(CompanyInventorySchema.resource)
            .options(joinedload(CompanyInventorySchema.resource))
            .where(CompanyInventorySchema.company_id == company_id)
            .order_by(ResourceSchema.name)
        )
        return self._session.scalars(stmt).all()

    def add_units(self, company_id: int, resource_id: int, units: int) -> int:
        """Increment the row (creating it on first acquisition); return the new quantity."""
        if units <= 0:
            raise InvalidAmountError("Units must be positive")
        insert = self._dialect_insert()
        stmt = insert(CompanyInventorySchema).values(
            company_id=company_id, resource_id=resource_id, quantity=units
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["company_id", "resource_id"],
            set_={
                "quantity": CompanyInventorySchema.quantity + stmt.excluded.quantity,
                "updated_at": func.now(),
            },
        ).returning(CompanyInventorySchema.quantity)
        quantity = self._session.scalar(stmt)
        self._expire(company_id, resource_id)
        return quantity

    def remove_units(self, company_id: int, resource_id: int, units: int) -> int:
        """Decrement the row when it holds enough units; return the new quantity."""
        if units <= 0:
            raise InvalidAmountError("Units must be positive")
        stmt = (
            update(CompanyInventorySchema)
            .where(
                CompanyInventorySchema.company_id == company_id,
                CompanyInventorySchema.resource_id == resource_id,
                CompanyInventorySchema.quantity >= units,
            )
            .values(
                quantity=CompanyInventorySchema.quantity - units,
                updated_at=func.now(),
            )
            .returning(CompanyInventorySchema.quantity)
            .execution_options(synchronize_session=False)
        )
        quantity = self._session.scalar(stmt)
        if quantity is None:
            raise InsufficientStockError()
        self._expire(company_id, resource_id)
        return quantity

    def set_units(self, company_id: int, resource_id: int, units: int) -> int:
        """Overwrite the held quantity (admin and seeding path)."""
        if units < 0:
            raise InvalidAmountError("Quantity cannot be negative")
        insert = self._dialect_insert()
        stmt = insert(CompanyInventorySchema).values(
            company_id=company_id, resource_id=resource_id, quantity=units
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["company_id", "resource_id"],
            set_={"quantity": stmt.excluded.quantity, "updated_at": func.now()},
        )
        self._session.execute(stmt)
        self._expire(company_id, resource_id)
        return units

    def _dialect_insert(self):
        dialect = self._session.get_bind().dialect.name
        try:
            return _UPSERT_INSERTS[dialect]
        except KeyError as exc:
            msg = f"Inventory upserts are not supported on {dialect}"
            raise NotImplementedError(msg) from exc

    def _expire(self, company_id: int, resource_id: int) -> None:
        for obj in list(self._session.identity_map.values()):
            if (
                isinstance(obj, CompanyInventorySchema)
                and obj.company_id == company_id
                and obj.resource_id == resource_id
            ):
                self._session.expire(obj)

"""Company persistence and the money ledger."""

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from yourownboss_backend.database.schemas import CompanySchema
from yourownboss_backend.shared import (
    CompanyAlreadyExistsError,
    CompanyNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
)


class CompanyRepository:
    """Encapsulates persistence operations for :class:`CompanySchema`.

    Balance changes go through :meth:`credit` and :meth:`debit` only. Each is a
    single conditional ``UPDATE`` so the database serializes concurrent
    mutations of one company row.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def create(self, *, user_id: int, name: str, initial_money: int) -> CompanySchema:
        company = CompanySchema(user_id=user_id, name=name, money=initial_money)
        self._session.add(company)
        try:
            self._session.flush()
        except IntegrityError as exc:
            self._session.rollback()
            raise CompanyAlreadyExistsError() from exc
        self._session.refresh(company)
        return company

    def get_by_id(self, company_id: int) -> CompanySchema | None:
        return self._session.get(CompanySchema, company_id)

    def get_by_user_id(self, user_id: int) -> CompanySchema | None:
        stmt = select(CompanySchema).where(CompanySchema.user_id == user_id)
        return self._session.scalar(stmt)

    def require_by_user_id(self, user_id: int) -> CompanySchema:
        company = self.get_by_user_id(user_id)
        if company is None:
            raise CompanyNotFoundError()
        return company

    def balance(self, company_id: int) -> int:
        """Read the committed balance straight from the database."""
        stmt = select(CompanySchema.money).where(CompanySchema.id == company_id)
        money = self._session.scalar(stmt)
        if money is None:
            raise CompanyNotFoundError()
        return money

    def credit(self, company_id: int, amount: int) -> int:
        """Add *amount* to the balance and return the new balance."""
        if amount <= 0:
            raise InvalidAmountError()
        stmt = (
            update(CompanySchema)
            .where(CompanySchema.id == company_id)
            .values(money=CompanySchema.money + amount, updated_at=func.now())
            .returning(CompanySchema.money)
            .execution_options(synchronize_session=False)
        )
        balance = self._session.scalar(stmt)
        if balance is None:
            raise CompanyNotFoundError()
        self._expire(company_id)
        return balance

    def debit(self, company_id: int, amount: int) -> int:
        """Subtract *amount* when the balance covers it; return the new balance."""
        if amount <= 0:
            raise InvalidAmountError()
        stmt = (
            update(CompanySchema)
            .where(CompanySchema.id == company_id, CompanySchema.money >= amount)
            .values(money=CompanySchema.money - amount, updated_at=func.now())
            .returning(CompanySchema.money)
            .execution_options(synchronize_session=False)
        )
        balance = self._session.scalar(stmt)
        if balance is None:
            # Either the row is missing or the solvency check failed.
            self.balance(company_id)
            raise InsufficientFundsError()
        self._expire(company_id)
        return balance

    def _expire(self, company_id: int) -> None:
        company = self._session.identity_map.get(
            self._session.identity_key(CompanySchema, company_id)
        )
        if company is not None:
            self._session.expire(company)

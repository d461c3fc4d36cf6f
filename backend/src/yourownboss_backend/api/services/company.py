"""Company creation and lookup."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from yourownboss_backend.database import CompanyRepository, CompanySchema
from yourownboss_backend.shared import CompanyAlreadyExistsError, InvalidCompanyNameError

logger = logging.getLogger(__name__)

MIN_COMPANY_NAME_LENGTH = 3
MAX_COMPANY_NAME_LENGTH = 50


class CompanyService:
    """Creates the single company a user may own."""

    def __init__(self, *, initial_money: int = 0) -> None:
        self._initial_money = initial_money

    def create_company(self, *, session: Session, user_id: int, name: str) -> CompanySchema:
        if not MIN_COMPANY_NAME_LENGTH <= len(name) <= MAX_COMPANY_NAME_LENGTH:
            raise InvalidCompanyNameError()

        repository = CompanyRepository(session)
        if repository.get_by_user_id(user_id) is not None:
            raise CompanyAlreadyExistsError()

        company = repository.create(
            user_id=user_id, name=name, initial_money=self._initial_money
        )
        logger.info("User %s founded company %s", user_id, company.id)
        return company

    def get_company(self, *, session: Session, user_id: int) -> CompanySchema:
        return CompanyRepository(session).require_by_user_id(user_id)

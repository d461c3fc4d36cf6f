"""Account registration, login and logout."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from yourownboss_backend.api.services.passwords import PasswordHasher
from yourownboss_backend.api.services.tokens import TokenManager
from yourownboss_backend.database import UserRepository, UserSchema
from yourownboss_backend.shared import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    WeakPasswordError,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 4


@dataclass(slots=True)
class AuthResult:
    """User plus the token pair issued for them."""

    user: UserSchema
    access_token: str
    refresh_token: str


class AccountService:
    """Handles credential checks and delegates token work to :class:`TokenManager`."""

    def __init__(
        self,
        *,
        token_manager: TokenManager,
        password_hasher: PasswordHasher | None = None,
        min_password_length: int = MIN_PASSWORD_LENGTH,
    ) -> None:
        self._tokens = token_manager
        self._hasher = password_hasher or PasswordHasher()
        self._min_password_length = min_password_length

    def register(self, *, session: Session, username: str, password: str) -> AuthResult:
        if len(password) < self._min_password_length:
            msg = f"Password must be at least {self._min_password_length} characters"
            raise WeakPasswordError(msg)

        repository = UserRepository(session)
        if repository.get_by_username(username) is not None:
            raise UserAlreadyExistsError()

        user = repository.add(
            UserSchema(username=username, password_hash=self._hasher.hash(password))
        )
        logger.info("Registered user %s", user.id)
        return self._issue(session, user)

    def login(self, *, session: Session, username: str, password: str) -> AuthResult:
        user = UserRepository(session).get_by_username(username)
        if user is None or not self._hasher.verify(password, user.password_hash):
            logger.warning("Rejected login attempt")
            raise InvalidCredentialsError()
        logger.info("User %s logged in", user.id)
        return self._issue(session, user)

    def refresh_access_token(self, *, session: Session, refresh_token: str) -> str:
        return self._tokens.refresh(session, refresh_token)

    def logout(self, *, session: Session, refresh_token: str | None) -> None:
        """Revoke *refresh_token*. Never fails towards the caller."""
        try:
            self._tokens.revoke(session, refresh_token)
        except SQLAlchemyError:
            session.rollback()
            logger.exception("Could not revoke refresh token on logout")

    def logout_everywhere(self, *, session: Session, user_id: int) -> int:
        return self._tokens.revoke_all_for_user(session, user_id)

    def me(self, *, session: Session, user_id: int) -> UserSchema:
        return UserRepository(session).require(user_id)

    def _issue(self, session: Session, user: UserSchema) -> AuthResult:
        tokens = self._tokens.issue(session, user_id=user.id, username=user.username)
        return AuthResult(
            user=user,
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
        )

"""Repository helpers for working with users."""

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from yourownboss_backend.database.schemas import UserSchema
from yourownboss_backend.shared import UserAlreadyExistsError, UserNotFoundError


class UserRepository:
    """Encapsulates persistence operations for :class:`UserSchema`."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, user_id: int) -> UserSchema | None:
        """Return user entity by user's ID."""
        return self._session.get(UserSchema, user_id)

    def require(self, user_id: int) -> UserSchema:
        user = self.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    def get_by_username(self, username: str) -> UserSchema | None:
        """Return user entity by user's name."""
        stmt = select(UserSchema).where(UserSchema.username == username)
        return self._session.scalar(stmt)

    def add(self, user: UserSchema) -> UserSchema:
        """Add new user to database.

        A clash on the unique username surfaces as :class:`UserAlreadyExistsError`.
        """
        self._session.add(user)
        try:
            self._session.flush()
        except IntegrityError as exc:
            self._session.rollback()
            raise UserAlreadyExistsError() from exc
        self._session.refresh(user)
        return user

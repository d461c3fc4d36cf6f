"""Repository helpers for hashed refresh tokens."""

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from yourownboss_backend.database.schemas import RefreshTokenSchema


class RefreshTokenRepository:
    """Stores refresh token digests; knows nothing about how they are derived."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, *, user_id: int, token_hash: str, expires_at: datetime) -> RefreshTokenSchema:
        record = RefreshTokenSchema(
            user_id=user_id, token_hash=token_hash, expires_at=expires_at
        )
        self._session.add(record)
        self._session.flush()
        return record

    def find_usable_user_id(self, token_hash: str, *, now: datetime) -> int | None:
        """Return the owner of a non-revoked, unexpired token, if any."""
        stmt = select(RefreshTokenSchema.user_id).where(
            RefreshTokenSchema.token_hash == token_hash,
            RefreshTokenSchema.expires_at > now,
            RefreshTokenSchema.revoked_at.is_(None),
        )
        return self._session.scalar(stmt)

    def revoke(self, token_hash: str, *, now: datetime) -> int:
        """Mark a token revoked; already revoked or unknown tokens are left alone."""
        stmt = (
            update(RefreshTokenSchema)
            .where(
                RefreshTokenSchema.token_hash == token_hash,
                RefreshTokenSchema.revoked_at.is_(None),
            )
            .values(revoked_at=now)
            .execution_options(synchronize_session=False)
        )
        return self._session.execute(stmt).rowcount

    def revoke_all_for_user(self, user_id: int, *, now: datetime) -> int:
        stmt = (
            update(RefreshTokenSchema)
            .where(
                RefreshTokenSchema.user_id == user_id,
                RefreshTokenSchema.revoked_at.is_(None),
            )
            .values(revoked_at=now)
            .execution_options(synchronize_session=False)
        )
        return self._session.execute(stmt).rowcount

    def delete_expired(self, *, now: datetime) -> int:
        stmt = (
            delete(RefreshTokenSchema)
            .where(RefreshTokenSchema.expires_at <= now)
            .execution_options(synchronize_session=False)
        )
        return self._session.execute(stmt).rowcount

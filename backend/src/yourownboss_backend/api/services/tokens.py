"""Access/refresh token issuance, validation, refresh and revocation."""

from __future__ import annotations

import hashlib
import hmac
import logging
import math
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from sqlalchemy.orm import Session

from yourownboss_backend.database import RefreshTokenRepository, UserRepository
from yourownboss_backend.settings import BackendSettings
from yourownboss_backend.shared import (
    DomainError,
    InvalidTokenError,
    RefreshTokenInvalidError,
    TokenExpiredError,
)

logger = logging.getLogger(__name__)

REFRESH_TOKEN_BYTES = 32


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True, slots=True)
class Identity:
    """Authenticated caller, passed explicitly from the request gate to services."""

    user_id: int
    username: str


@dataclass(frozen=True, slots=True)
class AccessClaims:
    """Decoded contents of a valid access token."""

    user_id: int
    username: str
    expires_at: datetime

    @property
    def identity(self) -> Identity:
        return Identity(user_id=self.user_id, username=self.username)


@dataclass(frozen=True, slots=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenManager:
    """Issues stateless access tokens and stateful, revocable refresh tokens.

    Access tokens are HS256 JWTs checked by signature and expiry only. Refresh
    tokens are random strings; the database keeps nothing but an HMAC digest
    of each, together with its expiry and revocation time.
    """

    def __init__(
        self,
        *,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_ttl: timedelta = timedelta(minutes=15),
        refresh_token_ttl: timedelta = timedelta(days=7),
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if not secret_key:
            msg = "A signing secret is required"
            raise ValueError(msg)
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._access_token_ttl = access_token_ttl
        self._refresh_token_ttl = refresh_token_ttl
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: BackendSettings) -> TokenManager:
        return cls(
            secret_key=settings.auth_secret_key,
            algorithm=settings.auth_algorithm,
            access_token_ttl=timedelta(minutes=settings.access_token_ttl_minutes),
            refresh_token_ttl=timedelta(days=settings.refresh_token_ttl_days),
        )

    @property
    def access_token_ttl(self) -> timedelta:
        return self._access_token_ttl

    @property
    def refresh_token_ttl(self) -> timedelta:
        return self._refresh_token_ttl

    def create_access_token(self, user_id: int, username: str) -> str:
        now = self._clock()
        payload = {
            "sub": str(user_id),
            "username": username,
            "iat": now,
            # Rounded up so the whole-second claim never shortens the lifetime.
            "exp": math.ceil((now + self._access_token_ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def validate_access(self, token: str) -> AccessClaims:
        """Verify signature and expiry without touching the store.

        A token is expired from the exact instant of its ``exp`` claim.
        """
        try:
            data = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={
                    "require": ["exp", "sub"],
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
            expires_at = datetime.fromtimestamp(int(data["exp"]), tz=UTC)
            user_id = int(data["sub"])
        except (jwt.InvalidTokenError, TypeError, ValueError) as exc:
            raise InvalidTokenError() from exc

        username = data.get("username")
        if not isinstance(username, str):
            raise InvalidTokenError("Token carries no username")
        if self._clock() >= expires_at:
            raise TokenExpiredError()
        return AccessClaims(user_id=user_id, username=username, expires_at=expires_at)

    def hash_refresh_token(self, token: str) -> str:
        return hmac.new(
            self._secret_key.encode("utf-8"), token.encode("utf-8"), hashlib.sha256
        ).hexdigest()

    def issue(self, session: Session, *, user_id: int, username: str) -> TokenPair:
        """Mint an access token and persist the digest of a new refresh token."""
        refresh_token = secrets.token_urlsafe(REFRESH_TOKEN_BYTES)
        expires_at = self._clock() + self._refresh_token_ttl
        RefreshTokenRepository(session).add(
            user_id=user_id,
            token_hash=self.hash_refresh_token(refresh_token),
            expires_at=expires_at,
        )
        return TokenPair(
            access_token=self.create_access_token(user_id, username),
            refresh_token=refresh_token,
        )

    def validate_refresh(self, session: Session, token: str) -> int:
        """Return the owner of a usable refresh token."""
        if not token:
            raise RefreshTokenInvalidError()
        user_id = RefreshTokenRepository(session).find_usable_user_id(
            self.hash_refresh_token(token), now=self._clock()
        )
        if user_id is None:
            raise RefreshTokenInvalidError()
        return user_id

    def refresh(self, session: Session, token: str) -> str:
        """Mint a new access token for the owner of *token*.

        The refresh token itself is not rotated.
        """
        user_id = self.validate_refresh(session, token)
        try:
            user = UserRepository(session).require(user_id)
        except DomainError as exc:
            raise RefreshTokenInvalidError() from exc
        return self.create_access_token(user.id, user.username)

    def revoke(self, session: Session, token: str | None) -> None:
        """Revoke *token*; unknown or already revoked tokens are ignored."""
        if not token:
            return
        revoked = RefreshTokenRepository(session).revoke(
            self.hash_refresh_token(token), now=self._clock()
        )
        logger.debug("Refresh token revocation affected %d row(s)", revoked)

    def revoke_all_for_user(self, session: Session, user_id: int) -> int:
        revoked = RefreshTokenRepository(session).revoke_all_for_user(
            user_id, now=self._clock()
        )
        logger.info("Revoked %d refresh token(s) for user %s", revoked, user_id)
        return revoked

    def sweep_expired(self, session: Session) -> int:
        """Delete refresh token rows whose expiry has passed."""
        deleted = RefreshTokenRepository(session).delete_expired(now=self._clock())
        if deleted:
            logger.info("Swept %d expired refresh token(s)", deleted)
        return deleted


__all__ = ["AccessClaims", "Identity", "TokenManager", "TokenPair", "utcnow"]

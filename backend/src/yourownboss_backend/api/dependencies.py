"""Dependency providers for FastAPI routers."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from yourownboss_backend.api.cookies import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    set_access_cookie,
)
from yourownboss_backend.api.services import BackendServices, Identity
from yourownboss_backend.database import get_session
from yourownboss_backend.database.dependencies import SettingsDep
from yourownboss_backend.shared import Deadline, DomainError, ErrorKind, InvalidTokenError

logger = logging.getLogger(__name__)

SessionDep = Annotated[Session, Depends(get_session)]


def get_services(request: Request) -> BackendServices:
    """Return the services attached to the running application."""

    return request.app.state.services


ServicesDep = Annotated[BackendServices, Depends(get_services)]


def get_deadline(settings: SettingsDep) -> Deadline:
    """Start the per-request deadline clock."""

    return Deadline.after(settings.request_timeout_seconds)


DeadlineDep = Annotated[Deadline, Depends(get_deadline)]


def _bearer_token(request: Request) -> str | None:
    header = request.headers.get("Authorization")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme != "Bearer" or not token:
        return None
    return token


def require_identity(
    request: Request,
    response: Response,
    session: SessionDep,
    services: ServicesDep,
    settings: SettingsDep,
) -> Identity:
    """Resolve the caller from the access cookie, falling back to the refresh cookie.

    A valid refresh cookie silently mints a new access token, which is set on
    the response. Every other failure is a 401.
    """

    access_token = request.cookies.get(ACCESS_TOKEN_COOKIE) or _bearer_token(request)
    if access_token:
        try:
            return services.tokens.validate_access(access_token).identity
        except DomainError as exc:
            logger.debug("Access token rejected: %s", exc.message)

    refresh_token = request.cookies.get(REFRESH_TOKEN_COOKIE)
    if not refresh_token:
        raise InvalidTokenError("Missing credentials")

    try:
        access_token = services.accounts.refresh_access_token(
            session=session, refresh_token=refresh_token
        )
    except DomainError as exc:
        if exc.kind is not ErrorKind.UNAUTHORIZED:
            raise
        raise InvalidTokenError(exc.message) from exc

    set_access_cookie(
        response,
        access_token,
        lifetime=services.tokens.access_token_ttl,
        settings=settings,
    )
    claims = services.tokens.validate_access(access_token)
    logger.debug("Refreshed access token for user %s", claims.user_id)
    return claims.identity


IdentityDep = Annotated[Identity, Depends(require_identity)]


__all__ = [
    "DeadlineDep",
    "IdentityDep",
    "ServicesDep",
    "SessionDep",
    "get_deadline",
    "get_services",
    "require_identity",
]

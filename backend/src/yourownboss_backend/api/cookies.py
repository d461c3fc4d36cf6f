"""Cookie helpers for the access/refresh token pair."""

from __future__ import annotations

from datetime import timedelta

from fastapi import Response

from yourownboss_backend.settings import BackendSettings

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"


def _set(
    response: Response,
    *,
    key: str,
    value: str,
    lifetime: timedelta,
    settings: BackendSettings,
) -> None:
    response.set_cookie(
        key=key,
        value=value,
        max_age=int(lifetime.total_seconds()),
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )


def set_access_cookie(
    response: Response, token: str, *, lifetime: timedelta, settings: BackendSettings
) -> None:
    _set(response, key=ACCESS_TOKEN_COOKIE, value=token, lifetime=lifetime, settings=settings)


def set_refresh_cookie(
    response: Response, token: str, *, lifetime: timedelta, settings: BackendSettings
) -> None:
    _set(response, key=REFRESH_TOKEN_COOKIE, value=token, lifetime=lifetime, settings=settings)


def clear_auth_cookies(response: Response) -> None:
    response.delete_cookie(ACCESS_TOKEN_COOKIE, path="/", httponly=True)
    response.delete_cookie(REFRESH_TOKEN_COOKIE, path="/", httponly=True)

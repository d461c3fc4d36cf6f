"""Authentication endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request, Response, status

from yourownboss_backend.api.cookies import (
    REFRESH_TOKEN_COOKIE,
    clear_auth_cookies,
    set_access_cookie,
    set_refresh_cookie,
)
from yourownboss_backend.api.dependencies import IdentityDep, ServicesDep, SessionDep
from yourownboss_backend.api.models import (
    CredentialsRequest,
    ErrorResponse,
    MessageResponse,
    UserEnvelope,
    UserResponse,
)
from yourownboss_backend.api.services import AuthResult, BackendServices
from yourownboss_backend.database.dependencies import SettingsDep
from yourownboss_backend.settings import BackendSettings

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)


def _respond(
    response: Response,
    result: AuthResult,
    services: BackendServices,
    settings: BackendSettings,
) -> UserEnvelope:
    set_access_cookie(
        response,
        result.access_token,
        lifetime=services.tokens.access_token_ttl,
        settings=settings,
    )
    set_refresh_cookie(
        response,
        result.refresh_token,
        lifetime=services.tokens.refresh_token_ttl,
        settings=settings,
    )
    return UserEnvelope(user=UserResponse.model_validate(result.user))


@router.post(
    "/register",
    response_model=UserEnvelope,
    status_code=status.HTTP_201_CREATED,
)
def register_user(
    payload: CredentialsRequest,
    response: Response,
    session: SessionDep,
    services: ServicesDep,
    settings: SettingsDep,
) -> UserEnvelope:
    """Register a new user and set the session cookies."""

    result = services.accounts.register(
        session=session, username=payload.username, password=payload.password
    )
    return _respond(response, result, services, settings)


@router.post("/login", response_model=UserEnvelope)
def login_user(
    payload: CredentialsRequest,
    response: Response,
    session: SessionDep,
    services: ServicesDep,
    settings: SettingsDep,
) -> UserEnvelope:
    """Authenticate an existing user using username and password."""

    result = services.accounts.login(
        session=session, username=payload.username, password=payload.password
    )
    return _respond(response, result, services, settings)


@router.post("/logout", response_model=MessageResponse)
def logout_user(
    request: Request,
    response: Response,
    session: SessionDep,
    services: ServicesDep,
) -> MessageResponse:
    """Revoke the refresh cookie (if any) and clear both cookies."""

    services.accounts.logout(
        session=session, refresh_token=request.cookies.get(REFRESH_TOKEN_COOKIE)
    )
    clear_auth_cookies(response)
    return MessageResponse(message="logged out successfully")


@router.post("/logout-all", response_model=MessageResponse)
def logout_everywhere(
    identity: IdentityDep,
    response: Response,
    session: SessionDep,
    services: ServicesDep,
) -> MessageResponse:
    """Revoke every refresh token of the caller."""

    revoked = services.accounts.logout_everywhere(
        session=session, user_id=identity.user_id
    )
    clear_auth_cookies(response)
    return MessageResponse(message=f"revoked {revoked} session(s)")


@router.get("/me", response_model=UserEnvelope)
def read_me(
    identity: IdentityDep,
    session: SessionDep,
    services: ServicesDep,
) -> UserEnvelope:
    user = services.accounts.me(session=session, user_id=identity.user_id)
    return UserEnvelope(user=UserResponse.model_validate(user))

"""Translation of domain errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from yourownboss_backend.shared import DomainError, ErrorKind, InternalError

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INSUFFICIENT_FUNDS: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INSUFFICIENT_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _error(kind: ErrorKind, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_BY_KIND[kind],
        content={"error": message, "kind": kind.value},
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if exc.kind in (ErrorKind.INTERNAL, ErrorKind.TIMEOUT):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.debug("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return _error(exc.kind, exc.message)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return _error(ErrorKind.INVALID_INPUT, details or "Invalid request body")


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "Database error on %s %s", request.method, request.url.path, exc_info=exc
    )
    error = InternalError()
    return _error(error.kind, error.message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, database_error_handler)  # type: ignore[arg-type]

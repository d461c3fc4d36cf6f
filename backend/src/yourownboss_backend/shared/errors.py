"""Domain error taxonomy shared by repositories, services and the API layer."""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Closed set of failure categories surfaced by the backend."""

    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INVALID_INPUT = "invalid_input"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_STOCK = "insufficient_stock"
    UNAUTHORIZED = "unauthorized"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


class DomainError(Exception):
    """Base class for all expected failures, tagged with an :class:`ErrorKind`."""

    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class UserAlreadyExistsError(DomainError):
    """Raised when attempting to create a duplicate user."""

    kind = ErrorKind.CONFLICT
    default_message = "Username already exists"


class WeakPasswordError(DomainError):
    kind = ErrorKind.INVALID_INPUT
    default_message = "Password is too short"


class InvalidCredentialsError(DomainError):
    """Raised when supplied credentials are invalid.

    Unknown usernames and wrong passwords both map to this error.
    """

    kind = ErrorKind.UNAUTHORIZED
    default_message = "Invalid username or password"


class UserNotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND
    default_message = "User not found"


class CompanyAlreadyExistsError(DomainError):
    kind = ErrorKind.CONFLICT
    default_message = "User already has a company"


class CompanyNotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Company not found"


class InvalidCompanyNameError(DomainError):
    kind = ErrorKind.INVALID_INPUT
    default_message = "Company name must be between 3 and 50 characters"


class ResourceNotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Resource not found"


class InvalidAmountError(DomainError):
    kind = ErrorKind.INVALID_INPUT
    default_message = "Amount must be positive"


class InvalidPackCountError(DomainError):
    kind = ErrorKind.INVALID_INPUT
    default_message = "Pack count must be positive"


class InsufficientFundsError(DomainError):
    kind = ErrorKind.INSUFFICIENT_FUNDS
    default_message = "Insufficient funds"


class InsufficientStockError(DomainError):
    kind = ErrorKind.INSUFFICIENT_STOCK
    default_message = "Insufficient stock"


class InvalidTokenError(DomainError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Invalid token"


class TokenExpiredError(DomainError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Token expired"


class RefreshTokenInvalidError(DomainError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Invalid or expired refresh token"


class RequestTimeoutError(DomainError):
    kind = ErrorKind.TIMEOUT
    default_message = "Request deadline exceeded"


class InternalError(DomainError):
    kind = ErrorKind.INTERNAL
    default_message = "Internal server error"


__all__ = [
    "CompanyAlreadyExistsError",
    "CompanyNotFoundError",
    "DomainError",
    "ErrorKind",
    "InsufficientFundsError",
    "InsufficientStockError",
    "InternalError",
    "InvalidAmountError",
    "InvalidCompanyNameError",
    "InvalidCredentialsError",
    "InvalidPackCountError",
    "InvalidTokenError",
    "RefreshTokenInvalidError",
    "RequestTimeoutError",
    "ResourceNotFoundError",
    "TokenExpiredError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "WeakPasswordError",
]

"""Shared utilities, shared models and cross-cutting helpers for the backend."""

from yourownboss_backend.shared.deadline import Deadline
from yourownboss_backend.shared.enums import FlowDirection
from yourownboss_backend.shared.errors import (
    CompanyAlreadyExistsError,
    CompanyNotFoundError,
    DomainError,
    ErrorKind,
    InsufficientFundsError,
    InsufficientStockError,
    InternalError,
    InvalidAmountError,
    InvalidCompanyNameError,
    InvalidCredentialsError,
    InvalidPackCountError,
    InvalidTokenError,
    RefreshTokenInvalidError,
    RequestTimeoutError,
    ResourceNotFoundError,
    TokenExpiredError,
    UserAlreadyExistsError,
    UserNotFoundError,
    WeakPasswordError,
)
from yourownboss_backend.shared.value_objects import MONEY_SCALE, Money, TimeWindow

__all__ = [
    "MONEY_SCALE",
    "CompanyAlreadyExistsError",
    "CompanyNotFoundError",
    "Deadline",
    "DomainError",
    "ErrorKind",
    "FlowDirection",
    "InsufficientFundsError",
    "InsufficientStockError",
    "InternalError",
    "InvalidAmountError",
    "InvalidCompanyNameError",
    "InvalidCredentialsError",
    "InvalidPackCountError",
    "InvalidTokenError",
    "Money",
    "RefreshTokenInvalidError",
    "RequestTimeoutError",
    "ResourceNotFoundError",
    "TimeWindow",
    "TokenExpiredError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "WeakPasswordError",
]

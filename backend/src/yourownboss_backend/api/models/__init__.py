"""Models used for API request and response payloads."""

from yourownboss_backend.api.models.auth import (
    CredentialsRequest,
    UserEnvelope,
    UserResponse,
)
from yourownboss_backend.api.models.catalog import (
    InventoryItemResponse,
    ProcessResourceResponse,
    ProductionBuildingResponse,
    ProductionProcessResponse,
    ResourceResponse,
)
from yourownboss_backend.api.models.common import ErrorResponse, MessageResponse
from yourownboss_backend.api.models.company import CompanyResponse, CreateCompanyRequest
from yourownboss_backend.api.models.market import TradeRequest, TradeResponse

__all__ = [
    "CompanyResponse",
    "CreateCompanyRequest",
    "CredentialsRequest",
    "ErrorResponse",
    "InventoryItemResponse",
    "MessageResponse",
    "ProcessResourceResponse",
    "ProductionBuildingResponse",
    "ProductionProcessResponse",
    "ResourceResponse",
    "TradeRequest",
    "TradeResponse",
    "UserEnvelope",
    "UserResponse",
]

"""API request and response models."""

from itemsapi.api.models.errors import ErrorBody, ErrorCode, ErrorDetail, ErrorResponse
from itemsapi.api.models.health import ComponentHealth, HealthResponse

__all__ = [
    "ComponentHealth",
    "ErrorBody",
    "ErrorCode",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
]

"""Error response models for consistent API error handling."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Machine-readable error codes shared by every endpoint."""

    INVALID_REQUEST = "INVALID_REQUEST"
    """Body is malformed JSON, not a JSON object, or tries to change the key."""

    ITEM_NOT_FOUND = "ITEM_NOT_FOUND"
    """No record exists with the requested key."""

    STORE_ERROR = "STORE_ERROR"
    """The backing store rejected or failed the request."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorDetail(BaseModel):
    """Field-level detail for request validation failures."""

    field: str | None = None
    message: str


class ErrorBody(BaseModel):
    """Error body content for API error responses."""

    code: ErrorCode
    message: str
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """Standard error response format for all API errors.

    Example:
        {
            "error": {
                "code": "ITEM_NOT_FOUND",
                "message": "Item 0b6f... not found"
            }
        }
    """

    error: ErrorBody

"""API exception hierarchy for consistent error handling.

All API exceptions inherit from ItemsAPIError, whose status_code and
error_code drive the global exception handler.
"""

from itemsapi.api.models.errors import ErrorCode


class ItemsAPIError(Exception):
    """Base exception for all API errors."""

    status_code: int = 500
    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidRequestError(ItemsAPIError):
    """Raised when a body cannot be used as a record or patch."""

    status_code = 400
    error_code = ErrorCode.INVALID_REQUEST


class ItemNotFoundError(ItemsAPIError):
    """Raised when item_id doesn't exist."""

    status_code = 404
    error_code = ErrorCode.ITEM_NOT_FOUND


class StoreUnavailableError(ItemsAPIError):
    """Raised when the backing store fails a request."""

    status_code = 500
    error_code = ErrorCode.STORE_ERROR

"""Item store error hierarchy.

Every store implementation wraps backend-specific failures in one of the
StoreError subclasses so the API layer can map them without knowing which
backend is configured.
"""


class StoreError(Exception):
    """Base exception for all store errors."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ConnectionError(StoreError):  # noqa: A001
    """Raised when the store cannot be reached.

    Examples:
        - Database connection timeout
        - Endpoint unreachable or credentials missing
    """

    pass


class ItemNotFoundError(StoreError):
    """Raised when a conditional update targets a record that does not exist."""

    def __init__(self, item_id: str, cause: Exception | None = None) -> None:
        super().__init__(f"Item {item_id} not found", cause=cause)
        self.item_id = item_id


class InvalidPatchError(ValueError):
    """Raised when a request body cannot be applied as a record or patch."""

    pass

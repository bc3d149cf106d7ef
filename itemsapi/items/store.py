"""ItemStore abstract interface."""

from abc import ABC, abstractmethod

from itemsapi.items.models import Record, UpdatePlan


class ItemStore(ABC):
    """Abstract interface for the single-table record store.

    Every method is one atomic call against the backend. Implementations
    raise StoreError subclasses for backend failures and never retry.
    """

    backend: str = "abstract"

    def __init__(self, primary_key: str) -> None:
        self.primary_key = primary_key

    @abstractmethod
    async def put(self, record: Record) -> None:
        """Write a whole record, replacing any record with the same key."""
        pass

    @abstractmethod
    async def get(self, item_id: str) -> Record | None:
        """Get a record by primary key."""
        pass

    @abstractmethod
    async def scan(self) -> list[Record]:
        """Return every record in one unpaginated call, in store order."""
        pass

    @abstractmethod
    async def delete(self, item_id: str) -> None:
        """Delete a record. Deleting a missing key is not an error."""
        pass

    @abstractmethod
    async def update(self, item_id: str, plan: UpdatePlan) -> None:
        """Apply a non-empty plan to an existing record.

        Raises:
            ItemNotFoundError: If no record has this key
        """
        pass

    async def health_check(self) -> bool:
        """Check the backend is reachable."""
        return True

    async def close(self) -> None:
        """Release backend connections."""
        return None

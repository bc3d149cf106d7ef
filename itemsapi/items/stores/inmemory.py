"""In-memory implementation of ItemStore."""

import copy

from itemsapi.items.errors import ItemNotFoundError
from itemsapi.items.models import Record, UpdatePlan
from itemsapi.items.store import ItemStore


class InMemoryItemStore(ItemStore):
    """In-memory implementation of ItemStore for testing and development.

    Records are deep-copied on the way in and out so callers never share
    state with the store. Not suitable for production use.
    """

    backend = "inmemory"

    def __init__(self, primary_key: str) -> None:
        super().__init__(primary_key)
        self._items: dict[str, Record] = {}

    async def put(self, record: Record) -> None:
        self._items[str(record[self.primary_key])] = copy.deepcopy(record)

    async def get(self, item_id: str) -> Record | None:
        item = self._items.get(item_id)
        return copy.deepcopy(item) if item is not None else None

    async def scan(self) -> list[Record]:
        return [copy.deepcopy(item) for item in self._items.values()]

    async def delete(self, item_id: str) -> None:
        self._items.pop(item_id, None)

    async def update(self, item_id: str, plan: UpdatePlan) -> None:
        item = self._items.get(item_id)
        if item is None:
            raise ItemNotFoundError(item_id)

        for attribute, value in plan.assignments().items():
            item[attribute] = copy.deepcopy(value)
        for attribute in plan.removals():
            item.pop(attribute, None)

"""Item operations: the five CRUD pass-throughs over an ItemStore."""

import math
import time
import uuid
from collections.abc import Callable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from itemsapi.items.compiler import compile_update
from itemsapi.items.errors import InvalidPatchError, ItemNotFoundError
from itemsapi.items.models import Record
from itemsapi.items.store import ItemStore
from itemsapi.observability.logging import get_logger
from itemsapi.observability.metrics import NOOP_UPDATES, STORE_LATENCY, STORE_OPERATIONS

logger = get_logger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def _ensure_finite(value: Any, path: str) -> None:
    """Reject NaN and infinities, which JSON cannot represent."""
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidPatchError(f"Attribute '{path}' is not a finite number")
    if isinstance(value, Mapping):
        for key, item in value.items():
            _ensure_finite(item, f"{path}.{key}")
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _ensure_finite(item, f"{path}[{index}]")


class ItemService:
    """Maps item operations onto single store calls.

    Holds no mutable state of its own; the store carries all of it.
    Every operation makes at most one store call and never retries.
    """

    def __init__(
        self,
        store: ItemStore,
        primary_key: str,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._store = store
        self._primary_key = primary_key
        self._id_factory = id_factory

    @property
    def primary_key(self) -> str:
        return self._primary_key

    @contextmanager
    def _observe(self, operation: str) -> Iterator[None]:
        """Record latency and outcome of one store call."""
        start = time.perf_counter()
        outcome = "error"
        try:
            yield
            outcome = "success"
        except ItemNotFoundError:
            outcome = "not_found"
            raise
        finally:
            STORE_LATENCY.labels(operation, self._store.backend).observe(
                time.perf_counter() - start
            )
            STORE_OPERATIONS.labels(operation, self._store.backend, outcome).inc()

    async def create(self, body: Any) -> str:
        """Store a new record under a freshly generated key.

        Any client-supplied value for the key attribute is overwritten.

        Returns:
            The generated key

        Raises:
            InvalidPatchError: If body is not a JSON object or holds NaN/Infinity
        """
        if not isinstance(body, Mapping):
            raise InvalidPatchError(
                f"Item must be a JSON object, got {type(body).__name__}"
            )

        for key, value in body.items():
            _ensure_finite(value, key)

        item_id = self._id_factory()
        record: Record = dict(body)
        record[self._primary_key] = item_id

        with self._observe("put"):
            await self._store.put(record)

        logger.info("item_created", item_id=item_id, attributes=len(record))
        return item_id

    async def get(self, item_id: str) -> Record | None:
        with self._observe("get"):
            item = await self._store.get(item_id)

        logger.debug("item_fetched", item_id=item_id, found=item is not None)
        return item

    async def list_all(self) -> list[Record]:
        """Return every record from one unpaginated scan."""
        with self._observe("scan"):
            items = await self._store.scan()

        logger.debug("items_scanned", count=len(items))
        return items

    async def delete(self, item_id: str) -> None:
        with self._observe("delete"):
            await self._store.delete(item_id)

        logger.info("item_deleted", item_id=item_id)

    async def update(self, item_id: str, patch: Any) -> None:
        """Apply a partial update: null removes an attribute, anything else sets it.

        An empty patch succeeds without contacting the store.

        Raises:
            InvalidPatchError: If patch is not a JSON object, changes the key,
                or holds NaN/Infinity
            ItemNotFoundError: If no record has this key
        """
        if not isinstance(patch, Mapping):
            raise InvalidPatchError(
                f"Patch must be a JSON object, got {type(patch).__name__}"
            )

        if self._primary_key in patch:
            if patch[self._primary_key] != item_id:
                raise InvalidPatchError(
                    f"Attribute '{self._primary_key}' is the primary key and cannot be changed"
                )
            patch = {k: v for k, v in patch.items() if k != self._primary_key}

        for key, value in patch.items():
            _ensure_finite(value, key)

        plan = compile_update(patch)
        if plan.is_noop:
            NOOP_UPDATES.inc()
            logger.debug("item_update_skipped", item_id=item_id)
            return

        with self._observe("update"):
            await self._store.update(item_id, plan)

        logger.info(
            "item_updated",
            item_id=item_id,
            assigned=len(plan.assign_clauses),
            removed=len(plan.remove_clauses),
        )

"""Items domain: records, the update compiler, stores and operations."""

from itemsapi.items.compiler import compile_update
from itemsapi.items.errors import (
    ConnectionError,
    InvalidPatchError,
    ItemNotFoundError,
    StoreError,
)
from itemsapi.items.models import Record, UpdatePlan
from itemsapi.items.service import ItemService
from itemsapi.items.store import ItemStore

__all__ = [
    "ConnectionError",
    "InvalidPatchError",
    "ItemNotFoundError",
    "ItemService",
    "ItemStore",
    "Record",
    "StoreError",
    "UpdatePlan",
    "compile_update",
]

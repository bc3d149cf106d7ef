"""ItemStore implementations."""

from itemsapi.items.stores.dynamodb import DynamoDBItemStore
from itemsapi.items.stores.inmemory import InMemoryItemStore
from itemsapi.items.stores.postgres import PostgresItemStore

__all__ = ["DynamoDBItemStore", "InMemoryItemStore", "PostgresItemStore"]

"""ItemStore factory for creating backend instances.

Backend choice and tuning come from settings.storage. Secrets stay in the
environment: AWS credentials go through boto3's default chain, the
PostgreSQL DSN falls back to ITEMS_DATABASE_URL / DATABASE_URL.
"""

from itemsapi.config.settings import Settings
from itemsapi.db.pool import PostgresPool
from itemsapi.items.store import ItemStore
from itemsapi.items.stores.dynamodb import DynamoDBItemStore
from itemsapi.items.stores.inmemory import InMemoryItemStore
from itemsapi.items.stores.postgres import PostgresItemStore
from itemsapi.observability.logging import get_logger

logger = get_logger(__name__)


async def create_item_store(settings: Settings) -> ItemStore:
    """Create and initialize the ItemStore selected by configuration.

    Raises:
        ValueError: If the backend type is not supported
        StoreError: If a PostgreSQL backend cannot be prepared
    """
    storage = settings.storage
    backend = storage.backend

    logger.info(
        "creating_item_store",
        backend=backend,
        table=settings.table_name,
        primary_key=settings.primary_key,
    )

    if backend == "inmemory":
        return InMemoryItemStore(primary_key=settings.primary_key)

    if backend == "dynamodb":
        return DynamoDBItemStore(
            table_name=settings.table_name,
            primary_key=settings.primary_key,
            region=storage.dynamodb.region,
            endpoint_url=storage.dynamodb.endpoint_url,
            connect_timeout=storage.dynamodb.connect_timeout,
            read_timeout=storage.dynamodb.read_timeout,
        )

    if backend == "postgres":
        config = storage.postgres
        pool = PostgresPool(
            dsn=config.dsn,
            min_size=config.min_pool_size,
            max_size=config.max_pool_size,
            max_inactive_connection_lifetime=config.max_inactive_connection_lifetime,
            command_timeout=config.command_timeout,
        )
        await pool.connect()
        store = PostgresItemStore(
            pool,
            table_name=settings.table_name,
            primary_key=settings.primary_key,
        )
        if config.create_table:
            await store.ensure_table()
        return store

    raise ValueError(f"Unsupported item store backend: {backend}")

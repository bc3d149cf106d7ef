"""PostgreSQL implementation of ItemStore.

Each record lives in one row: the primary key in a text column named
after the configured key attribute, the whole document in a jsonb
column. Partial updates are a single UPDATE that merges the assigned
attributes and subtracts the removed ones.
"""

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import asyncpg

from itemsapi.db.pool import PostgresPool
from itemsapi.items.errors import ConnectionError, ItemNotFoundError, StoreError
from itemsapi.items.models import Record, UpdatePlan
from itemsapi.items.store import ItemStore
from itemsapi.observability.logging import get_logger

logger = get_logger(__name__)


def quote_ident(name: str) -> str:
    """Quote a SQL identifier."""
    return '"' + name.replace('"', '""') + '"'


class PostgresItemStore(ItemStore):
    """ItemStore backed by a PostgreSQL table with a jsonb document column."""

    backend = "postgres"

    def __init__(self, pool: PostgresPool, table_name: str, primary_key: str) -> None:
        super().__init__(primary_key)
        self._pool = pool
        self._table = quote_ident(table_name)
        self._key_column = quote_ident(primary_key)

    @asynccontextmanager
    async def _connection(self, operation: str) -> AsyncIterator[asyncpg.Connection]:
        """Acquire a pooled connection and translate driver errors."""
        try:
            async with self._pool.acquire() as conn:
                yield conn
        except (asyncpg.PostgresError, asyncpg.InterfaceError) as e:
            logger.error("postgres_request_failed", operation=operation, error=str(e))
            raise StoreError(f"PostgreSQL {operation} failed: {e}", cause=e) from e
        except OSError as e:
            logger.error("postgres_connection_failed", operation=operation, error=str(e))
            raise ConnectionError(f"PostgreSQL {operation} failed: {e}", cause=e) from e

    async def ensure_table(self) -> None:
        """Create the items table if it does not exist yet."""
        async with self._connection("create_table") as conn:
            await conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self._table} (
                    {self._key_column} text PRIMARY KEY,
                    document jsonb NOT NULL
                )
                """
            )
        logger.info("postgres_table_ready", table=self._table)

    async def put(self, record: Record) -> None:
        async with self._connection("put") as conn:
            await conn.execute(
                f"""
                INSERT INTO {self._table} ({self._key_column}, document)
                VALUES ($1, $2::jsonb)
                ON CONFLICT ({self._key_column})
                DO UPDATE SET document = EXCLUDED.document
                """,
                str(record[self.primary_key]),
                json.dumps(record),
            )

    async def get(self, item_id: str) -> Record | None:
        async with self._connection("get") as conn:
            document = await conn.fetchval(
                f"SELECT document FROM {self._table} WHERE {self._key_column} = $1",
                item_id,
            )
        if document is None:
            return None
        return json.loads(document)

    async def scan(self) -> list[Record]:
        async with self._connection("scan") as conn:
            rows = await conn.fetch(f"SELECT document FROM {self._table}")
        return [json.loads(row["document"]) for row in rows]

    async def delete(self, item_id: str) -> None:
        async with self._connection("delete") as conn:
            await conn.execute(
                f"DELETE FROM {self._table} WHERE {self._key_column} = $1",
                item_id,
            )

    async def update(self, item_id: str, plan: UpdatePlan) -> None:
        async with self._connection("update") as conn:
            status = await conn.execute(
                f"""
                UPDATE {self._table}
                SET document = (document || $2::jsonb) - $3::text[]
                WHERE {self._key_column} = $1
                """,
                item_id,
                json.dumps(plan.assignments()),
                plan.removals(),
            )
        # asyncpg returns the command tag, e.g. "UPDATE 1"
        if status.split()[-1] == "0":
            raise ItemNotFoundError(item_id)

    async def health_check(self) -> bool:
        try:
            async with self._connection("health_check") as conn:
                await conn.fetchval("SELECT 1")
            return True
        except StoreError as e:
            logger.warning("postgres_health_check_failed", error=str(e))
            return False

    async def close(self) -> None:
        await self._pool.close()

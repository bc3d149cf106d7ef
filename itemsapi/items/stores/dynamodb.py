"""DynamoDB implementation of ItemStore.

One boto3 client is built when the store is created and shared by every
request; boto3 clients are thread-safe, and each blocking call runs in a
worker thread via asyncio.to_thread.

Values cross the boundary in DynamoDB's native AttributeValue encoding.
JSON floats become Decimal on the way in; numbers come back as int when
integral and float otherwise.
"""

import asyncio
import base64
from decimal import Decimal, DecimalException
from typing import Any

import boto3
from boto3.dynamodb.types import Binary, TypeDeserializer, TypeSerializer
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from itemsapi.items.errors import (
    ConnectionError,
    InvalidPatchError,
    ItemNotFoundError,
    StoreError,
)
from itemsapi.items.models import Record, UpdatePlan
from itemsapi.items.store import ItemStore
from itemsapi.observability.logging import get_logger

logger = get_logger(__name__)

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def _to_dynamo(value: Any) -> Any:
    """Prepare a JSON value for TypeSerializer, which rejects floats."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_dynamo(v) for v in value]
    return value


def _from_dynamo(value: Any) -> Any:
    """Turn a deserialized DynamoDB value back into plain JSON."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _from_dynamo(v) for k, v in value.items()}
    if isinstance(value, (list, set, frozenset)):
        return [_from_dynamo(v) for v in value]
    if isinstance(value, Binary):
        return base64.b64encode(value.value).decode("ascii")
    return value


class DynamoDBItemStore(ItemStore):
    """ItemStore backed by a DynamoDB table with a string partition key."""

    backend = "dynamodb"

    def __init__(
        self,
        table_name: str,
        primary_key: str,
        client: Any = None,
        *,
        region: str | None = None,
        endpoint_url: str | None = None,
        connect_timeout: float = 5.0,
        read_timeout: float = 10.0,
    ) -> None:
        """Initialize the store.

        Args:
            table_name: DynamoDB table name
            primary_key: Partition key attribute name
            client: Prebuilt boto3 DynamoDB client (tests pass a stub)
            region: AWS region for a new client
            endpoint_url: Custom endpoint for a new client
            connect_timeout: Connect timeout for a new client (seconds)
            read_timeout: Read timeout for a new client (seconds)
        """
        super().__init__(primary_key)
        self._table_name = table_name
        self._serializer = TypeSerializer()
        self._deserializer = TypeDeserializer()

        if client is None:
            client = boto3.session.Session().client(
                "dynamodb",
                region_name=region,
                endpoint_url=endpoint_url,
                config=Config(
                    connect_timeout=connect_timeout,
                    read_timeout=read_timeout,
                    retries={"total_max_attempts": 1, "mode": "standard"},
                ),
            )
            logger.info(
                "dynamodb_client_created",
                table=table_name,
                region=region,
                endpoint_url=endpoint_url,
            )
        self._client = client

    def _key(self, item_id: str) -> dict[str, Any]:
        return {self.primary_key: {"S": item_id}}

    def _serialize(self, name: str, value: Any) -> dict[str, Any]:
        """Encode one value; numbers outside DynamoDB's range are client errors."""
        try:
            return self._serializer.serialize(_to_dynamo(value))
        except (TypeError, DecimalException) as e:
            raise InvalidPatchError(
                f"Attribute '{name}' cannot be stored in DynamoDB: {e}"
            ) from e

    def _serialize_item(self, record: Record) -> dict[str, Any]:
        return {k: self._serialize(k, v) for k, v in record.items()}

    def _deserialize_item(self, item: dict[str, Any]) -> Record:
        return {k: _from_dynamo(self._deserializer.deserialize(v)) for k, v in item.items()}

    async def _call(
        self, operation: str, item_id: str | None = None, **kwargs: Any
    ) -> dict[str, Any]:
        """Run one client call off the event loop and translate its errors."""
        method = getattr(self._client, operation)
        try:
            return await asyncio.to_thread(method, TableName=self._table_name, **kwargs)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code == CONDITIONAL_CHECK_FAILED and item_id is not None:
                raise ItemNotFoundError(item_id, cause=e) from e
            logger.error(
                "dynamodb_request_failed",
                operation=operation,
                error_code=code,
                error=str(e),
            )
            raise StoreError(f"DynamoDB {operation} failed: {code}", cause=e) from e
        except BotoCoreError as e:
            logger.error(
                "dynamodb_connection_failed",
                operation=operation,
                error=str(e),
            )
            raise ConnectionError(f"DynamoDB {operation} failed: {e}", cause=e) from e

    async def put(self, record: Record) -> None:
        await self._call("put_item", Item=self._serialize_item(record))

    async def get(self, item_id: str) -> Record | None:
        response = await self._call("get_item", Key=self._key(item_id))
        item = response.get("Item")
        if item is None:
            return None
        return self._deserialize_item(item)

    async def scan(self) -> list[Record]:
        response = await self._call("scan")
        if response.get("LastEvaluatedKey"):
            # A single scan call stops at 1 MB; get-all is unpaginated.
            logger.warning("dynamodb_scan_truncated", table=self._table_name)
        return [self._deserialize_item(item) for item in response.get("Items", [])]

    async def delete(self, item_id: str) -> None:
        await self._call("delete_item", Key=self._key(item_id))

    async def update(self, item_id: str, plan: UpdatePlan) -> None:
        names = dict(plan.attribute_names)
        key_alias = "#pk"
        while key_alias in names:
            key_alias += "_"
        names[key_alias] = self.primary_key

        kwargs: dict[str, Any] = {
            "Key": self._key(item_id),
            "UpdateExpression": plan.expression,
            "ConditionExpression": f"attribute_exists({key_alias})",
            "ExpressionAttributeNames": names,
        }
        # DynamoDB rejects an empty ExpressionAttributeValues map
        if plan.attribute_values:
            kwargs["ExpressionAttributeValues"] = {
                token: self._serialize(plan.attribute_names["#" + token[1:]], value)
                for token, value in plan.attribute_values.items()
            }

        await self._call("update_item", item_id=item_id, **kwargs)

    async def health_check(self) -> bool:
        try:
            await self._call("describe_table")
            return True
        except StoreError as e:
            logger.warning("dynamodb_health_check_failed", error=str(e))
            return False

    async def close(self) -> None:
        self._client.close()
        logger.info("dynamodb_client_closed")

"""DynamoDB-backed task store."""

import asyncio
import logging
from collections.abc import Callable
from decimal import Decimal
from typing import Any, TypeVar

import boto3
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from src.core.config import Settings
from src.core.errors import TaskNotFoundError, TaskStoreError
from src.core.task_store import MUTABLE_FIELDS


logger = logging.getLogger(__name__)

T = TypeVar("T")

_UPDATE_EXPRESSION = "SET " + ", ".join(f"#{field} = :{field}" for field in MUTABLE_FIELDS)
_UPDATE_CONDITION = "attribute_exists(#id)"

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _to_dynamo(record: dict[str, Any]) -> dict[str, Any]:
    return {key: _serializer.serialize(value) for key, value in record.items()}


def _plain(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value


def _from_dynamo(item: dict[str, Any]) -> dict[str, Any]:
    """Decode a typed DynamoDB item, turning Decimal numbers back into int/float."""
    return {key: _plain(_deserializer.deserialize(value)) for key, value in item.items()}


def create_dynamodb_client(settings: Settings) -> Any:
    """Build a low-level boto3 DynamoDB client from settings.

    Static credentials are used when both are configured, otherwise boto3's
    default credential chain applies.
    """
    session = boto3.session.Session(
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        region_name=settings.aws_region,
    )
    return session.client("dynamodb", endpoint_url=settings.dynamodb_endpoint_url)


class DynamoDBTaskStore:
    """Task store over a DynamoDB table with a single `id` partition key.

    boto3 is blocking, so each call runs in a worker thread.
    """

    def __init__(self, *, client: Any, table_name: str) -> None:
        self._client = client
        self._table_name = table_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "DynamoDBTaskStore":
        return cls(client=create_dynamodb_client(settings), table_name=settings.dynamodb_table_name)

    @property
    def table_name(self) -> str:
        return self._table_name

    async def _call(self, operation: str, func: Callable[[], T], **context: object) -> T:
        try:
            return await asyncio.to_thread(func)
        except (BotoCoreError, ClientError) as e:
            logger.error(
                f"{operation}_failed",
                extra={"table": self.table_name, "error": str(e), **context},
            )
            msg = f"Failed to {operation.replace('_', ' ')} in {self.table_name}: {e}"
            raise TaskStoreError(msg) from e

    async def get(self, task_id: str) -> dict[str, Any] | None:
        """Fetch a task by id, or None if absent."""
        response = await self._call(
            "get_task",
            lambda: self._client.get_item(TableName=self.table_name, Key=_to_dynamo({"id": task_id})),
            task_id=task_id,
        )
        item = response.get("Item")
        return _from_dynamo(item) if item else None

    async def put(self, task: dict[str, Any]) -> None:
        """Write a task, replacing any record with the same id."""
        await self._call(
            "put_task",
            lambda: self._client.put_item(TableName=self.table_name, Item=_to_dynamo(task)),
            task_id=task.get("id"),
        )
        logger.info("Stored task", extra={"table": self.table_name, "task_id": task.get("id")})

    async def scan(self) -> list[dict[str, Any]]:
        """Read every task in the table, following scan pages to the end."""
        items: list[dict[str, Any]] = []
        scan_kwargs: dict[str, Any] = {"TableName": self.table_name}

        while True:
            kwargs = dict(scan_kwargs)
            response = await self._call("scan_tasks", lambda: self._client.scan(**kwargs))
            items.extend(_from_dynamo(item) for item in response.get("Items", []))

            last_key = response.get("LastEvaluatedKey")
            if not last_key:
                break
            scan_kwargs["ExclusiveStartKey"] = last_key

        logger.info("Scanned tasks", extra={"table": self.table_name, "count": len(items)})
        return items

    async def update(self, task_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Replace the mutable fields of an existing task in one conditional write.

        Raises:
            TaskNotFoundError: If no task exists under task_id
        """

        def _update() -> dict[str, Any]:
            return self._client.update_item(
                TableName=self.table_name,
                Key=_to_dynamo({"id": task_id}),
                UpdateExpression=_UPDATE_EXPRESSION,
                ExpressionAttributeNames={"#id": "id", **{f"#{field}": field for field in MUTABLE_FIELDS}},
                ExpressionAttributeValues=_to_dynamo({f":{field}": fields.get(field) for field in MUTABLE_FIELDS}),
                ConditionExpression=_UPDATE_CONDITION,
                ReturnValues="ALL_NEW",
            )

        try:
            response = await asyncio.to_thread(_update)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException":
                raise TaskNotFoundError(task_id) from e
            logger.error("update_task_failed", extra={"table": self.table_name, "task_id": task_id, "error": str(e)})
            msg = f"Failed to update task in {self.table_name}: {e}"
            raise TaskStoreError(msg) from e
        except BotoCoreError as e:
            logger.error("update_task_failed", extra={"table": self.table_name, "task_id": task_id, "error": str(e)})
            msg = f"Failed to update task in {self.table_name}: {e}"
            raise TaskStoreError(msg) from e

        logger.info("Updated task", extra={"table": self.table_name, "task_id": task_id})
        return _from_dynamo(response.get("Attributes", {}))

    async def delete(self, task_id: str) -> None:
        """Delete a task; deleting a missing id is not an error."""
        await self._call(
            "delete_task",
            lambda: self._client.delete_item(TableName=self.table_name, Key=_to_dynamo({"id": task_id})),
            task_id=task_id,
        )
        logger.info("Deleted task", extra={"table": self.table_name, "task_id": task_id})

    async def ping(self) -> None:
        """Check that the table is reachable."""
        await self._call(
            "describe_table",
            lambda: self._client.describe_table(TableName=self.table_name),
        )

    async def close(self) -> None:
        """boto3 clients hold no connection that needs releasing."""

"""DynamoDB table provisioning (code-first approach)."""

import logging
from typing import Any

from botocore.exceptions import ClientError

from src.core.config import constants


logger = logging.getLogger(__name__)


def get_table_definition(table_name: str) -> dict[str, Any]:
    """Get the CreateTable request for the task table.

    A single string partition key on `id` and on-demand capacity; every other
    attribute is schemaless.
    """
    return {
        "TableName": table_name,
        "KeySchema": [{"AttributeName": constants.TABLE_PARTITION_KEY, "KeyType": "HASH"}],
        "AttributeDefinitions": [{"AttributeName": constants.TABLE_PARTITION_KEY, "AttributeType": "S"}],
        "BillingMode": constants.TABLE_BILLING_MODE,
    }


def table_exists(*, client: Any, table_name: str) -> bool:
    """Return True if the table exists, False on ResourceNotFoundException."""
    try:
        client.describe_table(TableName=table_name)
    except ClientError as e:
        if e.response.get("Error", {}).get("Code") == "ResourceNotFoundException":
            return False
        raise
    return True


def delete_table(*, client: Any, table_name: str) -> None:
    """Delete the table and block until it is gone."""
    logger.info(f"Deleting existing table: {table_name}")
    client.delete_table(TableName=table_name)
    client.get_waiter("table_not_exists").wait(TableName=table_name)
    logger.info("Table deletion complete", extra={"table": table_name})


def create_table(*, client: Any, table_name: str) -> None:
    """Create the table and block until it is active."""
    logger.info(f"Creating DynamoDB table: {table_name}")
    client.create_table(**get_table_definition(table_name))
    client.get_waiter("table_exists").wait(TableName=table_name)
    logger.info(
        "Table created successfully",
        extra={"table": table_name, "billing_mode": constants.TABLE_BILLING_MODE},
    )


def ensure_table(*, client: Any, table_name: str, force: bool = False) -> bool:
    """Create the task table if missing, or recreate it when force is set.

    Args:
        client: boto3 DynamoDB client
        table_name: Name of the task table
        force: Delete and recreate an existing table (drops all tasks)

    Returns:
        True if a table was created, False if an existing table was kept
    """
    if table_exists(client=client, table_name=table_name):
        if not force:
            logger.info(f'Table "{table_name}" already exists; skipping creation. Use --force to recreate it.')
            return False
        delete_table(client=client, table_name=table_name)

    create_table(client=client, table_name=table_name)
    return True

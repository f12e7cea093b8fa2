#!/usr/bin/env python3
"""Create the DynamoDB table that backs the task API.

Usage:
    uv run python scripts/setup_dynamodb.py          # create if missing
    uv run python scripts/setup_dynamodb.py --force  # delete and recreate (drops all tasks)
"""

import argparse
import logging
import sys

from botocore.exceptions import BotoCoreError, ClientError

from src.core.config import settings
from src.core.dynamodb_store import create_dynamodb_client
from src.core.schema import ensure_table


logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Provision the task table")
    parser.add_argument("--force", action="store_true", help="Delete and recreate an existing table")
    args = parser.parse_args(argv)

    try:
        logger.info("Checking AWS credentials...")
        settings.require_credential("aws_access_key_id", "AWS access key")
        settings.require_credential("aws_secret_access_key", "AWS secret key")
        logger.info("AWS credentials found.")

        client = create_dynamodb_client(settings)
        created = ensure_table(client=client, table_name=settings.dynamodb_table_name, force=args.force)
    except (ValueError, BotoCoreError, ClientError) as e:
        logger.error(f"Setup failed: {e}")
        return 1

    if created:
        logger.info(f"Table {settings.dynamodb_table_name} is ready. You can now start the server.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Command-line script for creating the DynamoDB feedback table.

Usage:
    python backend/scripts/create_feedback_table.py [--table NAME] [--region REGION]

Options:
    --table         Table name (defaults to FEEDBACK_TABLE)
    --region        AWS region (defaults to AWS_DEFAULT_REGION)
    --endpoint-url  Custom endpoint, e.g. http://localhost:8000 for DynamoDB Local
    --dry-run       Show what would be created without creating it
"""

import argparse
import logging
import os
import sys

import boto3
from botocore.exceptions import ClientError

# Add the src directory to Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from utils.settings import get_settings  # noqa: E402

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def table_definition(table_name: str) -> dict:
    """Key schema for the feedback table: one item per submission."""
    return {
        "TableName": table_name,
        "KeySchema": [{"AttributeName": "feedback_id", "KeyType": "HASH"}],
        "AttributeDefinitions": [
            {"AttributeName": "feedback_id", "AttributeType": "S"}
        ],
        "BillingMode": "PAY_PER_REQUEST",
    }


def create_table(dynamodb, table_name: str) -> bool:
    """Create the table and wait for it; returns False if it already exists."""
    try:
        table = dynamodb.create_table(**table_definition(table_name))
    except ClientError as e:
        if e.response["Error"]["Code"] == "ResourceInUseException":
            logger.info(f"Table {table_name} already exists")
            return False
        raise

    table.wait_until_exists()
    logger.info(f"Created table {table_name}")
    return True


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Create the feedback table")
    parser.add_argument("--table", default=settings.feedback_table)
    parser.add_argument("--region", default=settings.aws_default_region)
    parser.add_argument("--endpoint-url", default=settings.dynamodb_endpoint_url)
    parser.add_argument("--dry-run", action="store_true")
    args = parser.parse_args(argv)

    if args.dry_run:
        logger.info("DRY RUN: Would create table %s in %s", args.table, args.region)
        print(table_definition(args.table))
        return 0

    try:
        dynamodb = boto3.resource(
            "dynamodb", region_name=args.region, endpoint_url=args.endpoint_url
        )
        create_table(dynamodb, args.table)
    except ClientError as e:
        logger.error(f"AWS error: {e.response['Error']['Message']}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

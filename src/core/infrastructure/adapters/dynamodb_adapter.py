"""Boto3 wrapper for the image record table."""

import os
from typing import Any, Protocol

import boto3

from core.utils.constants import (
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_IMAGE_METADATA_TABLE_NAME,
)

Item = dict[str, Any]


class DynamoDBAdapterProtocol(Protocol):
    """What the record store needs from the table."""

    def put_item(self, *, item: Item, condition_expression: str | None = None) -> Item: ...

    def get_item(self, *, key: Item) -> Item: ...

    def update_item(self, *, key: Item, **kwargs: Any) -> Item: ...

    def delete_item(self, *, key: Item, **kwargs: Any) -> Item: ...

    def query(self, **kwargs: Any) -> Item: ...


class DynamoDBAdapter:
    """Passes calls through to a boto3 `Table`.

    Raw boto3 responses are returned and botocore errors propagate;
    `DynamoDBImageStore` interprets both.
    """

    def __init__(self, table_name: str | None = None, table: Any = None) -> None:
        if table is None:
            table_name = table_name or os.getenv(ENV_IMAGE_METADATA_TABLE_NAME)
            if not table_name:
                raise RuntimeError(f"{ENV_IMAGE_METADATA_TABLE_NAME} environment variable is not set")

            table = boto3.resource(
                "dynamodb",
                endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
                region_name=os.getenv(ENV_AWS_REGION),
            ).Table(table_name)

        self.table = table

    def put_item(self, *, item: Item, condition_expression: str | None = None) -> Item:
        if condition_expression:
            return self.table.put_item(Item=item, ConditionExpression=condition_expression)
        return self.table.put_item(Item=item)

    def get_item(self, *, key: Item) -> Item:
        # Strongly consistent so a read right after a write sees it
        return self.table.get_item(Key=key, ConsistentRead=True)

    def update_item(self, *, key: Item, **kwargs: Any) -> Item:
        return self.table.update_item(Key=key, **kwargs)

    def delete_item(self, *, key: Item, **kwargs: Any) -> Item:
        return self.table.delete_item(Key=key, **kwargs)

    def query(self, **kwargs: Any) -> Item:
        return self.table.query(**kwargs)

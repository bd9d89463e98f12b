"""Thin DynamoDB adapter wrapping boto3 client operations."""

import os
from typing import Any, Protocol, cast

import boto3

from core.utils.constants import ENV_AWS_ENDPOINT_URL, ENV_AWS_REGION


class _Boto3DynamoDBClient(Protocol):
    """Internal typing for boto3 DynamoDB client (AWS-facing only)."""

    def scan(self, **kwargs: Any) -> dict[str, Any]: ...
    def get_item(self, **kwargs: Any) -> dict[str, Any]: ...
    def put_item(self, **kwargs: Any) -> dict[str, Any]: ...


class DynamoDBAdapterProtocol(Protocol):
    """Minimal DynamoDB adapter protocol (store-facing)."""

    def scan(
        self,
        *,
        limit: int,
        exclusive_start_key: dict[str, Any] | None = None,
        projection: str | None = None,
    ) -> dict[str, Any]: ...

    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]: ...

    def put_item(self, *, item: dict[str, Any]) -> dict[str, Any]: ...


class DynamoDBAdapter:
    """Low-level DynamoDB operations (mechanical, no error handling).

    This adapter:
    - Wraps the boto3 DynamoDB client, which is safe to share between
      the threads of the metadata fetcher
    - Works with attribute-value encoded items ({"S": ...})
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, *, table_name: str) -> None:
        """Create the DynamoDB client for the given table."""
        if not table_name:
            raise RuntimeError("DynamoDB table name must not be empty")

        self._table_name = table_name
        self._client = cast(
            _Boto3DynamoDBClient,
            boto3.client(
                "dynamodb",
                endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
                region_name=os.getenv(ENV_AWS_REGION),
            ),
        )

    @property
    def table_name(self) -> str:
        return self._table_name

    def scan(
        self,
        *,
        limit: int,
        exclusive_start_key: dict[str, Any] | None = None,
        projection: str | None = None,
    ) -> dict[str, Any]:
        """Scan one page of the table.

        Raises boto3 exceptions - caught by domain implementation.
        """
        kwargs: dict[str, Any] = {"TableName": self._table_name, "Limit": limit}

        if exclusive_start_key:
            kwargs["ExclusiveStartKey"] = exclusive_start_key

        if projection:
            kwargs["ProjectionExpression"] = "#p"
            kwargs["ExpressionAttributeNames"] = {"#p": projection}

        return self._client.scan(**kwargs)

    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]:
        """Retrieve item by key.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._client.get_item(TableName=self._table_name, Key=key)

    def put_item(self, *, item: dict[str, Any]) -> dict[str, Any]:
        """Insert or replace an item.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self._client.put_item(TableName=self._table_name, Item=item)

"""
Pytest configuration and fixtures for image-gateway tests.
Provides AWS mocking, the img_url DynamoDB table and Lambda context fixtures.
"""

import os
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import boto3
import pytest
from boto3.dynamodb.types import TypeSerializer
from moto import mock_aws

from core.models.record import KeyListPage, StoredRecord

TABLE_NAME = "img-url-test"

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")


@pytest.fixture(autouse=True)
def gateway_env(monkeypatch):
    """Start every test from a known gateway configuration."""
    for name in (
        "BASIC_PASS",
        "IMG_URL_TABLE_NAME",
        "TG_BOT_TOKEN",
        "TG_CHAT_ID",
        "TELEGRAM_API_BASE_URL",
        "TG_REQUEST_TIMEOUT",
        "PUBLIC_BASE_URL",
        "AWS_ENDPOINT_URL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_client(aws_mock):
    return boto3.client("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def kv_table(dynamodb_client, monkeypatch) -> str:
    """
    Create the img_url table and point the gateway at it.

    moto discards the table when the mock context exits.
    """
    dynamodb_client.create_table(
        TableName=TABLE_NAME,
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "key", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "key", "AttributeType": "S"}],
    )
    monkeypatch.setenv("IMG_URL_TABLE_NAME", TABLE_NAME)
    return TABLE_NAME


@pytest.fixture
def kv_put_item(dynamodb_client, kv_table) -> Callable[..., None]:
    """
    Helper to insert a raw record into the img_url table.

    Usage:
        kv_put_item("a.jpg", metadata={"fileName": "a"}, value='{"x": 1}')
    """
    serializer = TypeSerializer()

    def _put(key: str, *, metadata: dict[str, Any] | None = None, value: str | None = None) -> None:
        item: dict[str, Any] = {"key": {"S": key}}
        if value is not None:
            item["value"] = {"S": value}
        if metadata is not None:
            item["metadata"] = serializer.serialize(metadata)
        dynamodb_client.put_item(TableName=kv_table, Item=item)

    return _put


@pytest.fixture
def kv_get_item(dynamodb_client, kv_table) -> Callable[[str], dict[str, Any] | None]:
    """
    Helper to read a raw record (attribute-value encoded) from the table.
    """

    def _get(key: str) -> dict[str, Any] | None:
        response = dynamodb_client.get_item(TableName=kv_table, Key={"key": {"S": key}})
        return response.get("Item")

    return _get


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


class InMemoryStore:
    """KeyValueStore double serving fixed pages and records."""

    def __init__(
        self,
        records: dict[str, dict[str, Any]] | None = None,
        *,
        page_size: int | None = None,
    ) -> None:
        self.records = dict(records or {})
        self.page_size = page_size
        self.list_calls: list[tuple[int, str | None]] = []
        self.puts: list[tuple[str, str, dict[str, Any] | None]] = []

    def list_keys(self, *, limit: int, cursor: str | None = None):
        self.list_calls.append((limit, cursor))
        keys = list(self.records)
        size = min(limit, self.page_size or limit)
        start = int(cursor) if cursor else 0
        page = keys[start : start + size]
        end = start + len(page)
        complete = end >= len(keys)
        return KeyListPage(
            keys=page,
            cursor=None if complete else str(end),
            list_complete=complete,
        )

    def get_with_metadata(self, key: str):
        if key not in self.records:
            return None
        raw = self.records[key]
        return StoredRecord(key=key, value=raw.get("value"), metadata=raw.get("metadata"))

    def put(self, key: str, value: str, *, metadata: dict[str, Any] | None = None) -> None:
        self.puts.append((key, value, metadata))
        self.records[key] = {"value": value, "metadata": metadata}


@pytest.fixture
def in_memory_store() -> Callable[..., InMemoryStore]:
    def _make(records: dict[str, dict[str, Any]] | None = None, **kwargs: Any) -> InMemoryStore:
        return InMemoryStore(records, **kwargs)

    return _make

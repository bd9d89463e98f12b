"""DynamoDB-backed implementation of KeyValueStore."""

import base64
import binascii
import json
from decimal import Decimal
from typing import Any

from aws_lambda_powertools import Logger
from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError

from core.infrastructure.adapters.dynamodb_adapter import (
    DynamoDBAdapter,
    DynamoDBAdapterProtocol,
)
from core.models.errors import InvalidCursorError, KVStoreError
from core.models.record import KeyListPage, StoredRecord
from core.repositories.kv_repository import KeyValueStore
from core.utils.constants import (
    ERROR_CODE_KV_GET_FAILED,
    ERROR_CODE_KV_LIST_FAILED,
    ERROR_CODE_KV_PUT_FAILED,
    KV_KEY_ATTRIBUTE,
    KV_METADATA_ATTRIBUTE,
    KV_VALUE_ATTRIBUTE,
)

Metadata = dict[str, Any]

logger = Logger(utc=True)

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def encode_cursor(last_evaluated_key: dict[str, Any]) -> str:
    """Turn a DynamoDB LastEvaluatedKey into an opaque URL-safe token."""
    raw = json.dumps(last_evaluated_key, separators=(",", ":"), sort_keys=True)
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str) -> dict[str, Any]:
    """Inverse of encode_cursor.

    Raises:
        InvalidCursorError: If the token was not produced by encode_cursor
    """
    try:
        padded = cursor + "=" * (-len(cursor) % 4)
        decoded = json.loads(base64.urlsafe_b64decode(padded.encode("ascii")))
    except (binascii.Error, UnicodeError, ValueError) as exc:
        raise InvalidCursorError(details={"cursor": cursor}) from exc

    if not isinstance(decoded, dict) or KV_KEY_ATTRIBUTE not in decoded:
        raise InvalidCursorError(details={"cursor": cursor})

    return decoded


def _to_python(value: Any) -> Any:
    """Replace the Decimals produced by TypeDeserializer with int/float."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _to_python(v) for k, v in value.items()}
    if isinstance(value, (list, set, tuple)):
        return [_to_python(v) for v in value]
    return value


def _to_dynamo(value: Any) -> Any:
    """Replace floats with Decimals so TypeSerializer accepts them."""
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _to_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_to_dynamo(v) for v in value]
    return value


class DynamoDBKeyValueStore(KeyValueStore):
    """DynamoDB-backed img_url store with error handling.

    Each record is one item: the partition key holds the record key,
    `value` holds the text payload and `metadata` holds a map.
    All boto3 errors are caught and translated into KVStoreError
    carrying the underlying message.
    """

    def __init__(
        self,
        adapter: DynamoDBAdapterProtocol | None = None,
        *,
        table_name: str | None = None,
    ) -> None:
        """Initialize with a DynamoDB adapter or a table name."""
        if adapter is None:
            if not table_name:
                raise ValueError("either adapter or table_name is required")
            adapter = DynamoDBAdapter(table_name=table_name)
        self._db: DynamoDBAdapterProtocol = adapter

    def list_keys(self, *, limit: int, cursor: str | None = None) -> KeyListPage:
        start_key = decode_cursor(cursor) if cursor else None

        logger.debug("Listing keys", extra={"limit": limit, "has_cursor": bool(cursor)})

        try:
            response = self._db.scan(
                limit=limit,
                exclusive_start_key=start_key,
                projection=KV_KEY_ATTRIBUTE,
            )
        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB scan failed", extra={"error": str(exc)})
            raise KVStoreError(
                message=str(exc),
                error_code=ERROR_CODE_KV_LIST_FAILED,
            ) from exc

        keys = [
            item[KV_KEY_ATTRIBUTE]["S"]
            for item in response.get("Items", [])
            if KV_KEY_ATTRIBUTE in item
        ]
        last_evaluated_key = response.get("LastEvaluatedKey")

        return KeyListPage(
            keys=keys,
            cursor=encode_cursor(last_evaluated_key) if last_evaluated_key else None,
            list_complete=not last_evaluated_key,
        )

    def get_with_metadata(self, key: str) -> StoredRecord | None:
        try:
            response = self._db.get_item(key={KV_KEY_ATTRIBUTE: {"S": key}})
        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB get_item failed", extra={"key": key, "error": str(exc)})
            raise KVStoreError(
                message=str(exc),
                error_code=ERROR_CODE_KV_GET_FAILED,
                details={"key": key},
            ) from exc

        item = response.get("Item")
        if item is None:
            return None

        value = item.get(KV_VALUE_ATTRIBUTE)
        metadata = item.get(KV_METADATA_ATTRIBUTE)

        # Only text values and map metadata are meaningful to callers
        value_text = _deserializer.deserialize(value) if value is not None else None
        metadata_map = (
            _to_python(_deserializer.deserialize(metadata)) if metadata is not None else None
        )

        return StoredRecord(
            key=key,
            value=value_text if isinstance(value_text, str) else None,
            metadata=metadata_map if isinstance(metadata_map, dict) else None,
        )

    def put(self, key: str, value: str, *, metadata: Metadata | None = None) -> None:
        item: dict[str, Any] = {
            KV_KEY_ATTRIBUTE: {"S": key},
            KV_VALUE_ATTRIBUTE: {"S": value},
        }
        if metadata is not None:
            item[KV_METADATA_ATTRIBUTE] = _serializer.serialize(_to_dynamo(metadata))

        try:
            self._db.put_item(item=item)
        except (ClientError, BotoCoreError) as exc:
            logger.error("DynamoDB put_item failed", extra={"key": key, "error": str(exc)})
            raise KVStoreError(
                message=str(exc),
                error_code=ERROR_CODE_KV_PUT_FAILED,
                details={"key": key},
            ) from exc

        logger.info("Record stored", extra={"key": key})

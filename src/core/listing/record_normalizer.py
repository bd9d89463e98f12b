"""
Normalization of stored records into listing items.

Metadata and the optional JSON value payload are merged through explicit
precedence functions so each rule can be exercised without any I/O.
"""

import json
import math
import re
from typing import Any

from core.models.record import ListingItem, Metadata, RecordMetadata, ValuePayload
from core.utils.files import serving_url

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_value_payload(value: str | None) -> ValuePayload | None:
    """Parse the value text into a payload.

    Returns None for a blank value, text that is not JSON, or JSON that
    is not an object. Never raises.
    """
    if not value or not value.strip():
        return None

    try:
        decoded = json.loads(value)
    except ValueError:
        return None

    if not isinstance(decoded, dict):
        return None

    return ValuePayload.model_validate(decoded)


def coerce_timestamp(value: Any) -> int | float | None:
    """Numbers pass through; text is read as a leading base-10 integer.

    Anything unparsable resolves to None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


def resolve_file_name(
    key: str,
    metadata: RecordMetadata,
    payload: ValuePayload | None,
) -> str:
    """metadata fileName → payload fileName → the key itself."""
    if metadata.file_name:
        return metadata.file_name
    if payload is not None and payload.file_name:
        return payload.file_name
    return key


def resolve_upload_time(
    metadata: RecordMetadata,
    payload: ValuePayload | None,
) -> int | float | None:
    """metadata TimeStamp → payload uploadTime → payload TimeStamp → None."""
    if metadata.time_stamp is not None:
        raw = metadata.time_stamp
    elif payload is not None and payload.upload_time is not None:
        raw = payload.upload_time
    elif payload is not None:
        raw = payload.time_stamp
    else:
        raw = None

    return coerce_timestamp(raw)


def build_listing_item(
    origin: str,
    key: str,
    metadata: Metadata | None,
    value: str | None,
) -> ListingItem:
    """Project one stored record into its public listing shape."""
    meta = RecordMetadata.model_validate(metadata or {})
    payload = parse_value_payload(value)

    return ListingItem(
        key=key,
        url=serving_url(origin, key),
        file_name=resolve_file_name(key, meta, payload),
        upload_time=resolve_upload_time(meta, payload),
        storage_type=meta.storage_type or None,
    )

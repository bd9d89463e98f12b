"""Helpers for reading API Gateway proxy events."""

import base64
import binascii
from typing import Any

from core.models.errors import RequestValidationError
from core.utils.constants import ERROR_CODE_INVALID_JSON, MESSAGE_INVALID_JSON_BODY


def query_param(event: dict[str, Any], name: str) -> str | None:
    """Return a query string parameter, or None when absent."""
    params = event.get("queryStringParameters") or {}
    value = params.get(name)
    return value if isinstance(value, str) else None


def header(event: dict[str, Any], name: str) -> str | None:
    """Return a request header using a case-insensitive lookup."""
    headers = event.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def request_body(event: dict[str, Any]) -> str:
    """Return the raw request body as text, decoding base64 bodies.

    Raises:
        RequestValidationError: If a base64 body is not UTF-8 text
    """
    body = event.get("body") or ""
    if event.get("isBase64Encoded") and body:
        try:
            return base64.b64decode(body, validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise RequestValidationError(
                message=MESSAGE_INVALID_JSON_BODY,
                error_code=ERROR_CODE_INVALID_JSON,
            ) from exc
    return body


def request_origin(event: dict[str, Any], *, override: str | None = None) -> str:
    """Return the origin (scheme://host) the request was made against.

    A configured public base URL wins; otherwise the origin is rebuilt
    from the forwarded headers API Gateway passes through.
    """
    if override:
        return override.rstrip("/")

    host = header(event, "Host") or (event.get("requestContext") or {}).get("domainName")
    if not host:
        return ""

    scheme = header(event, "X-Forwarded-Proto") or "https"
    return f"{scheme}://{host}"

"""
Centralized API response builder for AWS Lambda / API Gateway.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from core.utils.constants import (
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    MESSAGE_INTERNAL_ERROR,
    MESSAGE_UNAUTHORIZED,
    PREFLIGHT_MAX_AGE,
)

JsonDict = dict[str, Any]


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses.

    One builder is created per endpoint so that every response of that
    endpoint carries the same CORS policy.
    """

    DEFAULT_HEADERS: dict[str, str] = {
        "Content-Type": DEFAULT_CONTENT_TYPE,
    }

    def __init__(
        self,
        *,
        methods: str,
        allow_headers: str,
        origin: str = CORS_ORIGIN,
    ) -> None:
        self.cors_headers: dict[str, str] = {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Methods": methods,
            "Access-Control-Allow-Headers": allow_headers,
        }

    def _build_headers(self) -> dict[str, str]:
        headers: dict[str, str] = dict(self.DEFAULT_HEADERS)

        # Always include CORS headers
        headers.update(self.cors_headers)

        return headers

    def _response(self, *, status: HTTPStatus, body: JsonDict) -> JsonDict:
        return {
            "statusCode": status.value,
            "headers": self._build_headers(),
            "body": json.dumps(body),
        }

    def ok(self, body: JsonDict) -> JsonDict:
        return self._response(status=HTTPStatus.OK, body=body)

    def preflight(self) -> JsonDict:
        """204 answer to a CORS preflight request."""
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": {
                **self.cors_headers,
                "Access-Control-Max-Age": PREFLIGHT_MAX_AGE,
            },
            "body": "",
        }

    def error(self, *, status: HTTPStatus, message: str) -> JsonDict:
        return self._response(status=status, body={"error": message})

    def bad_request(self, message: str) -> JsonDict:
        return self.error(status=HTTPStatus.BAD_REQUEST, message=message)

    def unauthorized(self, message: str = MESSAGE_UNAUTHORIZED) -> JsonDict:
        return self.error(status=HTTPStatus.UNAUTHORIZED, message=message)

    def internal_error(self, message: str = MESSAGE_INTERNAL_ERROR) -> JsonDict:
        return self.error(status=HTTPStatus.INTERNAL_SERVER_ERROR, message=message)

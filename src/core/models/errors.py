"""Custom exception classes for the image gateway."""

from http import HTTPStatus
from typing import Any

from core.utils.constants import (
    ERROR_CODE_CONFIGURATION,
    ERROR_CODE_INGESTION_FAILED,
    ERROR_CODE_INVALID_CURSOR,
    ERROR_CODE_KV_STORE,
    ERROR_CODE_UNAUTHORIZED,
    ERROR_CODE_VALIDATION_FAILED,
    MESSAGE_INVALID_CURSOR,
    MESSAGE_UNAUTHORIZED,
)


class GatewayError(Exception):
    """
    Base exception for all image gateway errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    The `status` class attribute is the HTTP status the error maps to
    when it escapes a handler.
    """

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class AuthorizationError(GatewayError):
    """Raised when the presented credential does not match the shared secret."""

    status = HTTPStatus.UNAUTHORIZED

    def __init__(
        self,
        *,
        message: str = MESSAGE_UNAUTHORIZED,
        error_code: str = ERROR_CODE_UNAUTHORIZED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class ConfigurationError(GatewayError):
    """Raised when a required binding or credential is not configured."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_CONFIGURATION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class RequestValidationError(GatewayError):
    """Raised when the request body or parameters are malformed."""

    status = HTTPStatus.BAD_REQUEST

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class InvalidCursorError(RequestValidationError):
    """Raised when a listing cursor cannot be decoded."""

    def __init__(
        self,
        *,
        message: str = MESSAGE_INVALID_CURSOR,
        error_code: str = ERROR_CODE_INVALID_CURSOR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class KVStoreError(GatewayError):
    """Raised when a key-value store operation fails."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_KV_STORE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class IngestionItemError(GatewayError):
    """Raised inside the ingestion dispatcher when a single item fails.

    Never escapes the dispatcher; it is converted into a failed
    ingestion result for that item.
    """

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_INGESTION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )

"""
Common decorators and helpers for API Gateway Lambda handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import GatewayError
from core.utils.constants import MESSAGE_INTERNAL_ERROR, SERVICE_NAME
from core.utils.response import ResponseBuilder

logger = Logger(service=SERVICE_NAME, utc=True)

JsonDict = dict[str, Any]


def _log_error(
    message: str,
    *,
    handler_name: str,
    request_id: str | None,
    exc: Exception,
    level: str = "warning",
) -> None:
    """
    Log error with consistent structure and full context.

    Args:
        message: Log message
        handler_name: Name of the handler function
        request_id: AWS request ID
        exc: Exception that was raised
        level: Log level ('warning' or 'exception')
    """
    log_extra = {
        "handler": handler_name,
        "request_id": request_id,
        "error": str(exc),
        "error_type": type(exc).__name__,
    }

    if level == "exception":
        logger.exception(message, extra=log_extra)
    else:
        logger.warning(message, extra=log_extra)


def api_gateway_handler(
    responses: ResponseBuilder,
) -> Callable[[Callable[..., JsonDict]], Callable[..., JsonDict]]:
    """
    Decorator factory for API Gateway Lambda handlers.

    Provides:
    - Automatic CORS preflight (OPTIONS) handling, before any auth check
    - GatewayError translation to `{"error": message}` with the error's status
    - Any other exception becomes a 500 carrying the exception message
    - Request ID tracking and structured logging

    Example:
        @api_gateway_handler(ResponseBuilder(methods="GET, OPTIONS", allow_headers="Content-Type"))
        def handler(event, context):
            ...
    """

    def decorator(func: Callable[..., JsonDict]) -> Callable[..., JsonDict]:
        @wraps(func)
        def wrapper(event: Any, context: Any) -> JsonDict:
            # Handle CORS preflight requests
            if event.get("httpMethod") == "OPTIONS":
                return responses.preflight()

            request_id = getattr(context, "aws_request_id", None)

            try:
                return func(event, context)

            except GatewayError as exc:
                _log_error(
                    "Request rejected",
                    handler_name=func.__name__,
                    request_id=request_id,
                    exc=exc,
                    level="exception" if exc.status >= 500 else "warning",
                )
                return responses.error(status=exc.status, message=exc.message)

            # Catch-all for unexpected errors
            except Exception as exc:
                _log_error(
                    "Unexpected error in handler",
                    handler_name=func.__name__,
                    request_id=request_id,
                    exc=exc,
                    level="exception",
                )
                return responses.internal_error(str(exc) or MESSAGE_INTERNAL_ERROR)

        return wrapper

    return decorator

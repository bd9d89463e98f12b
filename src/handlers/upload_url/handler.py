"""
Lambda handler responsible for ingesting images by external URL.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.infrastructure.adapters.telegram_adapter import TelegramAdapter
from core.infrastructure.aws.dynamodb_kv_store import DynamoDBKeyValueStore
from core.models.config import GatewayConfig
from core.models.errors import ConfigurationError
from core.utils.auth import query_or_bearer_credential, require_authorized
from core.utils.constants import (
    MESSAGE_BOT_NOT_CONFIGURED,
    MESSAGE_INVALID_UPLOAD_BODY,
    METRICS_NAMESPACE,
    SERVICE_NAME,
    UPLOAD_CORS_HEADERS,
    UPLOAD_CORS_METHODS,
)
from core.utils.decorators import api_gateway_handler
from core.utils.request import request_body, request_origin
from core.utils.response import ResponseBuilder
from core.utils.validators import parse_json_body, validate_request

from .models import IngestionSuccess, UploadUrlRequest, UploadUrlResponse
from .service import UploadUrlService

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE, service=SERVICE_NAME)

responses = ResponseBuilder(methods=UPLOAD_CORS_METHODS, allow_headers=UPLOAD_CORS_HEADERS)


@api_gateway_handler(responses)
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle batch upload-by-URL requests.

    Expected API Gateway event structure:
    {
        "httpMethod": "POST",
        "queryStringParameters": {"pwd": "..."},     # or Authorization: Bearer
        "body": "{\"list\": [{\"url\": \"...\", \"title\": \"...\"}]}"
    }

    Every item is sent to the Telegram bot in turn and answered with its
    own success or failure entry; one bad item never fails the request.

    Args:
        event: API Gateway Lambda proxy event containing the URL list
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response with `{results}`
    """
    logger.info(
        "Received upload-by-URL request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    config = GatewayConfig.from_env()

    require_authorized(config.basic_pass, query_or_bearer_credential(event))

    if not config.bot_configured:
        raise ConfigurationError(message=MESSAGE_BOT_NOT_CONFIGURED)

    body = parse_json_body(request_body(event))
    request = validate_request(UploadUrlRequest, body, message=MESSAGE_INVALID_UPLOAD_BODY)

    bot = TelegramAdapter(
        bot_token=config.bot_token or "",
        chat_id=config.chat_id or "",
        api_base_url=config.telegram_api_base_url,
        timeout=config.bot_request_timeout,
    )
    store = (
        DynamoDBKeyValueStore(table_name=config.kv_table_name)
        if config.store_configured
        else None
    )
    service = UploadUrlService(
        bot=bot,
        store=store,
        base_url=request_origin(event, override=config.public_base_url),
    )

    results = service.process_all(request.items)

    succeeded = sum(1 for result in results if isinstance(result, IngestionSuccess))
    metrics.add_metric(name="IngestionSucceeded", unit=MetricUnit.Count, value=succeeded)
    metrics.add_metric(
        name="IngestionFailed", unit=MetricUnit.Count, value=len(results) - succeeded
    )

    logger.info(
        "Upload-by-URL batch processed",
        extra={"total": len(results), "succeeded": succeeded},
    )

    return responses.ok(UploadUrlResponse(results=results).to_response())

"""
Lambda handler responsible for listing every stored image/file.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.config import GatewayConfig
from core.models.errors import ConfigurationError
from core.utils.auth import query_credential, require_authorized
from core.utils.constants import (
    LIST_CORS_HEADERS,
    LIST_CORS_METHODS,
    MESSAGE_KV_NOT_CONFIGURED,
    METRICS_NAMESPACE,
    SERVICE_NAME,
)
from core.utils.decorators import api_gateway_handler
from core.utils.request import request_origin
from core.utils.response import ResponseBuilder

from .models import ListFilesRequest, ListFilesResponse
from .service import ListService

logger = Logger(utc=True)
tracer = Tracer()
metrics = Metrics(namespace=METRICS_NAMESPACE, service=SERVICE_NAME)

responses = ResponseBuilder(methods=LIST_CORS_METHODS, allow_headers=LIST_CORS_HEADERS)


@api_gateway_handler(responses)
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle requests to list stored files.

    Auth is a `pwd` query parameter compared with BASIC_PASS. The whole
    key space is returned in one response; `cursor` only moves the
    starting point of the walk.

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response with `{list, total}`.
        Errors: 401 on a wrong `pwd`, 400 `Invalid cursor` when `cursor`
        is not a token this endpoint issued, 500 on a missing binding or a
        store failure.
    """
    logger.info(
        "Received file list request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    config = GatewayConfig.from_env()
    request = ListFilesRequest.model_validate(event.get("queryStringParameters") or {})

    require_authorized(config.basic_pass, query_credential(event))

    if not config.store_configured:
        raise ConfigurationError(message=MESSAGE_KV_NOT_CONFIGURED)

    service = ListService(table_name=config.kv_table_name)
    items = service.list_files(
        origin=request_origin(event, override=config.public_base_url),
        cursor=request.cursor or None,
    )

    metrics.add_metric(name="FilesListed", unit=MetricUnit.Count, value=len(items))

    response = ListFilesResponse(items=items, total=len(items))

    return responses.ok(response.to_response())

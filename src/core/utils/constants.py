"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================

# Client Errors
ERROR_CODE_UNAUTHORIZED = "UNAUTHORIZED"
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_INVALID_JSON = "INVALID_JSON"
ERROR_CODE_INVALID_CURSOR = "INVALID_CURSOR"

# Configuration Errors
ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"

# Key-Value Store Errors
ERROR_CODE_KV_STORE = "KV_STORE_ERROR"
ERROR_CODE_KV_LIST_FAILED = "KV_LIST_FAILED"
ERROR_CODE_KV_GET_FAILED = "KV_GET_FAILED"
ERROR_CODE_KV_PUT_FAILED = "KV_PUT_FAILED"

# Ingestion Errors
ERROR_CODE_INGESTION_FAILED = "INGESTION_FAILED"

# ============================================================================
# Error Messages
# ============================================================================

MESSAGE_UNAUTHORIZED = "Unauthorized"
MESSAGE_INTERNAL_ERROR = "Internal error"
MESSAGE_KV_NOT_CONFIGURED = "KV namespace img_url not configured"
MESSAGE_BOT_NOT_CONFIGURED = "TG_BOT_TOKEN or TG_CHAT_ID not configured"
MESSAGE_INVALID_JSON_BODY = "Invalid JSON body"
MESSAGE_INVALID_UPLOAD_BODY = (
    "body must be { list: [ { url, title? } ] } with at least one item"
)
MESSAGE_INVALID_CURSOR = "Invalid cursor"

# Per-item ingestion errors
MESSAGE_INVALID_URL = "missing or invalid url"
MESSAGE_NETWORK_ERROR = "network error"
MESSAGE_INVALID_BOT_RESPONSE = "invalid response from Telegram"
MESSAGE_BOT_API_ERROR = "Telegram API error"
MESSAGE_NO_FILE_ID = "no file_id in response"
MESSAGE_PERSIST_FAILED = "failed to persist record"
MESSAGE_INGESTION_FAILED = "ingestion failed"


# ============================================================================
# Listing Constraints
# ============================================================================

# A single Scan call never returns more than this many keys
LIST_PAGE_SIZE: Final[int] = 1000

# Maximum number of concurrent get-with-metadata calls
METADATA_BATCH_SIZE: Final[int] = 50


# ============================================================================
# Ingestion Constraints
# ============================================================================

CAPTION_MAX_LENGTH: Final[int] = 1024
DEFAULT_EXTENSION: Final[str] = "jpg"
RANDOM_NAME_LENGTH: Final[int] = 8
STORAGE_TYPE_TELEGRAM: Final[str] = "telegram"
PLACEHOLDER_LIST_TYPE: Final[str] = "None"
PLACEHOLDER_LABEL: Final[str] = "None"

TELEGRAM_API_BASE_URL: Final[str] = "https://api.telegram.org"
DEFAULT_BOT_REQUEST_TIMEOUT: Final[float] = 30.0

# ============================================================================
# Key-Value Table Layout
# ============================================================================

KV_KEY_ATTRIBUTE = "key"
KV_VALUE_ATTRIBUTE = "value"
KV_METADATA_ATTRIBUTE = "metadata"

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
LIST_CORS_METHODS = "GET, OPTIONS"
LIST_CORS_HEADERS = "Content-Type"
UPLOAD_CORS_METHODS = "POST, OPTIONS"
UPLOAD_CORS_HEADERS = "Content-Type, Authorization"
PREFLIGHT_MAX_AGE = "86400"
DEFAULT_CONTENT_TYPE = "application/json"

QUERY_PARAM_PASSWORD = "pwd"
BEARER_PREFIX = "Bearer "
SERVING_PATH = "/file/"

# ============================================================================
# Observability
# ============================================================================

METRICS_NAMESPACE = "ImageGateway"
SERVICE_NAME = "image-gateway"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_BASIC_PASS = "BASIC_PASS"
ENV_IMG_URL_TABLE_NAME = "IMG_URL_TABLE_NAME"
ENV_TG_BOT_TOKEN = "TG_BOT_TOKEN"
ENV_TG_CHAT_ID = "TG_CHAT_ID"
ENV_TELEGRAM_API_BASE_URL = "TELEGRAM_API_BASE_URL"
ENV_TG_REQUEST_TIMEOUT = "TG_REQUEST_TIMEOUT"
ENV_PUBLIC_BASE_URL = "PUBLIC_BASE_URL"

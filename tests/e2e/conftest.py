"""
E2E fixtures for a gateway deployed to LocalStack.

Run with `pytest -m e2e`; every test is skipped when no deployment is found.
"""

import logging
import os

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError
import pytest

from e2e_api_client import E2EAPIClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

IMG_URL_TABLE_NAME = "img-url-snd"
ENDPOINT_BASE_URL = "http://localhost:4566"
STAGE = "snd"

# Fail fast when LocalStack is not running
_BOTO_CONFIG = Config(connect_timeout=2, read_timeout=5, retries={"max_attempts": 0})


# ============================================================================
# API Details Fixture
# ============================================================================


@pytest.fixture(scope="session")
def api_details():
    """Get API Gateway details from LocalStack"""
    try:
        apigateway = boto3.client(
            "apigateway",
            endpoint_url=ENDPOINT_BASE_URL,
            config=_BOTO_CONFIG,
        )
        apis = apigateway.get_rest_apis()
        api = next(api for api in apis["items"] if "image-gateway" in api["name"])
    except (BotoCoreError, ClientError, StopIteration) as e:
        logger.warning("Could not get API details from LocalStack: %s", e)
        pytest.skip(f"Could not get API details from LocalStack: {e}")

    endpoint = f"{ENDPOINT_BASE_URL}/restapis/{api['id']}/{STAGE}/_user_request_"

    return {"api_id": api["id"], "endpoint": endpoint, "stage": STAGE}


# ============================================================================
# API Client Fixtures
# ============================================================================


@pytest.fixture(scope="session")
def basic_pass():
    """Shared secret the deployment was configured with (empty disables auth)"""
    return os.getenv("E2E_BASIC_PASS", "")


@pytest.fixture
def api_client(api_details, basic_pass):
    """Authenticated HTTP client"""
    return E2EAPIClient(api_details["endpoint"], basic_pass or None)


@pytest.fixture
def anonymous_client(api_details):
    """HTTP client that never sends a credential"""
    return E2EAPIClient(api_details["endpoint"])


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def img_url_table(api_details):
    dynamodb = boto3.resource("dynamodb", endpoint_url=ENDPOINT_BASE_URL, config=_BOTO_CONFIG)
    return dynamodb.Table(IMG_URL_TABLE_NAME)


@pytest.fixture
def seeded_records(img_url_table):
    """Insert a few records directly and remove them afterwards."""
    records = [
        {
            "key": "e2e-one.png",
            "value": "",
            "metadata": {"TimeStamp": 1705315351123, "fileName": "one.png", "storageType": "telegram"},
        },
        {"key": "e2e-legacy.jpg", "value": '{"fileName": "legacy.jpg", "uploadTime": 1600000000000}'},
    ]

    for record in records:
        img_url_table.put_item(Item=record)

    yield [record["key"] for record in records]

    for record in records:
        try:
            img_url_table.delete_item(Key={"key": record["key"]})
        except ClientError as err:
            logger.error("Failed to remove seeded record %s", record["key"], exc_info=err)

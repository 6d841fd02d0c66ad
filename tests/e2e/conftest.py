"""
Fixtures for end-to-end tests against a LocalStack deployment.

The tests are skipped when LocalStack or the gallery API cannot be found.
Set `E2E_ID_TOKEN` to the token of a test user accepted by the API
authorizer.
"""

import logging
import os

import boto3
import pytest
from botocore.exceptions import BotoCoreError, ClientError

from gallery_client.api_client import GalleryApiClient

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)

S3_IMAGE_BUCKET_NAME = "image-gallery-images-snd"
DYNAMODB_TABLE_NAME = "image-gallery-records-snd"
ENDPOINT_BASE_URL = "http://localhost:4566"
STAGE = "snd"


@pytest.fixture(scope="session")
def api_details():
    """Get API Gateway details from LocalStack"""
    try:
        apigateway = boto3.client("apigateway", endpoint_url=ENDPOINT_BASE_URL)

        apis = apigateway.get_rest_apis()
        api = next(api for api in apis["items"] if "image-gallery" in api["name"])
        api_id = api["id"]
    except (BotoCoreError, ClientError, StopIteration) as e:
        pytest.skip(f"Could not get API details from LocalStack: {e}")

    token = os.getenv("E2E_ID_TOKEN")
    if not token:
        pytest.skip("E2E_ID_TOKEN is not set")

    return {
        "api_id": api_id,
        "token": token,
        "base_url": f"{ENDPOINT_BASE_URL}/restapis/{api_id}/{STAGE}/_user_request_/v1",
    }


@pytest.fixture
def api_client(api_details):
    """Authenticated gallery client"""
    return GalleryApiClient(api_details["base_url"], token=api_details["token"])


@pytest.fixture
def anonymous_client(api_details):
    """Gallery client without credentials"""
    return GalleryApiClient(api_details["base_url"])


@pytest.fixture(autouse=True)
def cleanup_storage_after_each_test(request):
    """Clean S3 and DynamoDB to prevent test data leakage."""
    yield

    if "api_details" not in request.fixturenames:
        return

    _cleanup_s3()
    _cleanup_dynamodb()


def _cleanup_s3():
    s3_client = boto3.client("s3", endpoint_url=ENDPOINT_BASE_URL)

    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=S3_IMAGE_BUCKET_NAME):
            for obj in page.get("Contents", []):
                s3_client.delete_object(Bucket=S3_IMAGE_BUCKET_NAME, Key=obj["Key"])
    except (BotoCoreError, ClientError) as err:
        logger.error("Failed to cleanup S3 bucket: %s", S3_IMAGE_BUCKET_NAME, exc_info=err)


def _cleanup_dynamodb():
    table = boto3.resource("dynamodb", endpoint_url=ENDPOINT_BASE_URL).Table(DYNAMODB_TABLE_NAME)

    try:
        scan_kwargs = {"ProjectionExpression": "image_id"}

        while True:
            response = table.scan(**scan_kwargs)

            for item in response.get("Items", []):
                table.delete_item(Key={"image_id": item["image_id"]})

            start_key = response.get("LastEvaluatedKey")
            if not start_key:
                break
            scan_kwargs["ExclusiveStartKey"] = start_key

    except (BotoCoreError, ClientError) as err:
        logger.error("Failed to cleanup DynamoDB table: %s", DYNAMODB_TABLE_NAME, exc_info=err)


# 1x1 transparent PNG
SAMPLE_PNG_BASE64 = (
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
)


@pytest.fixture
def sample_data_uri() -> str:
    return f"data:image/png;base64,{SAMPLE_PNG_BASE64}"

"""
Shared fixtures: moto-backed table and bucket, plus sample image records.

Environment defaults are set before any project module is imported so that
module-level powertools objects and settings pick them up.
"""

import base64
import os
from collections.abc import Callable
from typing import Any

TEST_TABLE = "image-gallery-records-test"
TEST_BUCKET = "image-gallery-images-test"

for name, value in {
    "AWS_REGION": "us-east-1",
    "AWS_DEFAULT_REGION": "us-east-1",
    "AWS_ACCESS_KEY_ID": "testing",
    "AWS_SECRET_ACCESS_KEY": "testing",
    "IMAGE_METADATA_TABLE_NAME": TEST_TABLE,
    "IMAGE_S3_BUCKET_NAME": TEST_BUCKET,
    "IMAGE_PUBLIC_URL_PREFIX": "https://cdn.example.com",
    "POWERTOOLS_TRACE_DISABLED": "true",
    "POWERTOOLS_METRICS_NAMESPACE": "ImageGallery",
    "POWERTOOLS_SERVICE_NAME": "image-gallery",
}.items():
    os.environ.setdefault(name, value)

import boto3  # noqa: E402
import pytest  # noqa: E402
from moto import mock_aws  # noqa: E402

from core.utils.constants import USER_CREATED_INDEX  # noqa: E402

Record = dict[str, Any]

# 1x1 PNG
PNG_BASE64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="


@pytest.fixture
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.environ["AWS_REGION"])


@pytest.fixture
def dynamodb_table(dynamodb_resource):
    """Image table keyed by image_id, listed per owner through the GSI."""
    table = dynamodb_resource.create_table(
        TableName=os.environ["IMAGE_METADATA_TABLE_NAME"],
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "image_id", "KeyType": "HASH"}],
        AttributeDefinitions=[
            {"AttributeName": attr, "AttributeType": "S"}
            for attr in ("image_id", "user_id", "created_at")
        ],
        GlobalSecondaryIndexes=[
            {
                "IndexName": USER_CREATED_INDEX,
                "KeySchema": [
                    {"AttributeName": "user_id", "KeyType": "HASH"},
                    {"AttributeName": "created_at", "KeyType": "RANGE"},
                ],
                "Projection": {"ProjectionType": "ALL"},
            },
        ],
    )
    table.wait_until_exists()
    return table


@pytest.fixture
def dynamodb_put_item(dynamodb_table) -> Callable[[Record], Record]:
    """Write a record straight to the table, bypassing the store."""

    def _put(item: Record) -> Record:
        dynamodb_table.put_item(Item=item)
        return item

    return _put


@pytest.fixture
def dynamodb_get_item(dynamodb_table) -> Callable[[str], Record | None]:
    """Read a record straight from the table; None when absent."""

    def _get(image_id: str) -> Record | None:
        return dynamodb_table.get_item(Key={"image_id": image_id}).get("Item")

    return _get


@pytest.fixture
def s3_client(aws_mock):
    return boto3.client("s3", region_name=os.environ["AWS_REGION"])


@pytest.fixture
def s3_bucket(s3_client):
    """Create the image bucket; yields the client for direct assertions."""
    s3_client.create_bucket(Bucket=os.environ["IMAGE_S3_BUCKET_NAME"])
    yield s3_client


@pytest.fixture
def s3_put_object(s3_bucket) -> Callable[..., Record]:
    def _put(key: str, body: bytes, content_type: str = "application/octet-stream") -> Record:
        return s3_bucket.put_object(
            Bucket=os.environ["IMAGE_S3_BUCKET_NAME"],
            Key=key,
            Body=body,
            ContentType=content_type,
        )

    return _put


@pytest.fixture
def s3_get_object(s3_bucket) -> Callable[[str], bytes]:
    """Bytes stored under a key."""

    def _get(key: str) -> bytes:
        response = s3_bucket.get_object(Bucket=os.environ["IMAGE_S3_BUCKET_NAME"], Key=key)
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_object_keys(s3_bucket) -> Callable[[], list[str]]:
    """Every key currently in the image bucket."""

    def _keys() -> list[str]:
        response = s3_bucket.list_objects_v2(Bucket=os.environ["IMAGE_S3_BUCKET_NAME"])
        return [obj["Key"] for obj in response.get("Contents", [])]

    return _keys


@pytest.fixture
def aws_resources(dynamodb_table, s3_bucket):
    """Table and bucket together, for tests that run the whole service."""
    return dynamodb_table, s3_bucket


def make_record(image_id: str, user_id: str, title: str, created_at: str, **overrides: Any) -> Record:
    """Record for a file stored by the service at `images/<user_id>/<image_id>.png`."""
    file_name = f"{image_id}.png"
    record: Record = {
        "image_id": image_id,
        "user_id": user_id,
        "title": title,
        "file_name": file_name,
        "file_url": f"https://cdn.example.com/images/{user_id}/{file_name}",
        "storage_key": f"images/{user_id}/{file_name}",
        "mime_type": "image/png",
        "file_size": 200,
        "created_at": created_at,
        "updated_at": None,
    }
    record.update(overrides)
    return record


@pytest.fixture
def sample_image_record() -> Record:
    return make_record(
        "img_1",
        "john",
        "Sunset",
        "2024-01-01T10:00:00Z",
        file_name="Ab3dEf7hIj9kLm0n.jpg",
        file_url="https://cdn.example.com/images/john/Ab3dEf7hIj9kLm0n.jpg",
        storage_key="images/john/Ab3dEf7hIj9kLm0n.jpg",
        mime_type="image/jpeg",
        file_size=100,
    )


@pytest.fixture
def multiple_image_records() -> list[Record]:
    """Two of john's images (one stored, one remote URL) and one of alice's."""
    return [
        make_record("img_2", "john", "Beach", "2024-01-02T10:00:00Z", file_name="beach.png"),
        make_record("img_3", "alice", "Cat", "2024-01-03T10:00:00Z", file_name="cat.png", file_size=300),
        make_record(
            "img_4",
            "john",
            "Mountains",
            "2024-01-04T10:00:00Z",
            file_name="mountains.jpg",
            file_url="https://example.org/mountains.jpg",
            storage_key=None,
            mime_type=None,
            file_size=None,
        ),
    ]


@pytest.fixture
def sample_image_binary() -> bytes:
    """1x1 PNG."""
    return base64.b64decode(PNG_BASE64)


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Smallest JPEG most decoders accept."""
    return (
        b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        b"\xff\xdb\x00C\x00\x08\x06\x06\x07\x06\x05\x08\x07\x07\x07\t\t\x08\n\x0c"
        b"\x14\r\x0c\x0b\x0b\x0c\x19\x12\x13\x0f\x14\x1d\x1a\x1f\x1e\x1d\x1a\x1c"
        b"\x1c $.' \",#\x1c\x1c(7),01444\x1f'9=82<.342\xff\xc0\x00\x0b\x08"
        b"\x00\x01\x00\x01\x01\x01\x11\x00\xff\xc4\x00\x14\x00\x01\x00\x00\x00"
        b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\t\xff\xc4\x00\x14\x10"
        b"\x01\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
        b"\xff\xda\x00\x08\x01\x01\x00\x00?\x00\x7f\x00\xff\xd9"
    )

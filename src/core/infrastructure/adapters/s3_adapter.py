"""Boto3 wrapper for the gallery image bucket."""

import os
from typing import Any, Protocol

import boto3

from core.utils.constants import (
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_IMAGE_S3_BUCKET_NAME,
)


class S3AdapterProtocol(Protocol):
    """What the image storage needs from an S3 bucket."""

    @property
    def bucket(self) -> str: ...

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None: ...

    def delete_object(self, *, key: str) -> None: ...


class S3Adapter:
    """Writes and removes objects in one bucket.

    botocore errors are not caught here; `S3ImageStorage` translates them.
    """

    def __init__(self, bucket: str | None = None, client: Any = None) -> None:
        bucket = bucket or os.getenv(ENV_IMAGE_S3_BUCKET_NAME)
        if not bucket:
            raise RuntimeError(f"{ENV_IMAGE_S3_BUCKET_NAME} environment variable is not set")

        self._bucket = bucket
        self._client = client or boto3.client(
            "s3",
            endpoint_url=os.getenv(ENV_AWS_ENDPOINT_URL),
            region_name=os.getenv(ENV_AWS_REGION),
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None:
        self._client.put_object(
            Bucket=self._bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            Metadata=metadata,
        )

    def delete_object(self, *, key: str) -> None:
        # S3 reports success for keys that do not exist
        self._client.delete_object(Bucket=self._bucket, Key=key)

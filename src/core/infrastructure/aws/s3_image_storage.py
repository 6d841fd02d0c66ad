"""Image storage on Amazon S3."""

import os

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import ImageDeletionFailedError, ImageUploadFailedError
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import ENV_AWS_REGION, STORAGE_KEY_PREFIX

logger = Logger(UTC=True)


class S3ImageStorage(ImageStorageRepository):
    """Keeps image files under `images/<user_id>/` in the gallery bucket."""

    def __init__(
        self,
        adapter: S3AdapterProtocol | None = None,
        *,
        public_url_prefix: str | None = None,
    ) -> None:
        self._s3: S3AdapterProtocol = adapter or S3Adapter()
        self._public_url_prefix = (public_url_prefix or self._bucket_url()).rstrip("/")

    def _bucket_url(self) -> str:
        region = os.getenv(ENV_AWS_REGION)
        if region and region != "us-east-1":
            return f"https://{self._s3.bucket}.s3.{region}.amazonaws.com"
        return f"https://{self._s3.bucket}.s3.amazonaws.com"

    @staticmethod
    def build_key(user_id: str, file_name: str) -> str:
        return f"{STORAGE_KEY_PREFIX}/{user_id}/{file_name}"

    def store_file(
        self,
        *,
        user_id: str,
        file_name: str,
        file_data: bytes,
        mime_type: str,
    ) -> str:
        key = self.build_key(user_id, file_name)

        try:
            self._s3.put_object(
                key=key,
                body=file_data,
                content_type=mime_type,
                metadata={"user_id": user_id},
            )
        except (BotoCoreError, ClientError) as exc:
            logger.error("Writing image file failed", extra={"key": key, "error": str(exc)})
            raise ImageUploadFailedError(
                message="Unable to store image at this time",
                details={"key": key},
            ) from exc

        logger.info(
            "Image file stored",
            extra={"key": key, "user_id": user_id, "size": len(file_data)},
        )
        return key

    def public_url(self, *, key: str) -> str:
        return f"{self._public_url_prefix}/{key}"

    def remove_file(self, *, key: str) -> None:
        try:
            self._s3.delete_object(key=key)
        except (BotoCoreError, ClientError) as exc:
            logger.error("Removing image file failed", extra={"key": key, "error": str(exc)})
            raise ImageDeletionFailedError(
                message="Unable to delete image at this time",
                details={"key": key},
            ) from exc

        logger.info("Image file removed", extra={"key": key})

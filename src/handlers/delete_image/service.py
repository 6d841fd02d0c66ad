"""Business logic for image deletion.

This module coordinates deletion of an image record and its stored file.
The record is removed first so the image disappears from the gallery even
if the stored file cannot be cleaned up.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_image_store import DynamoDBImageStore
from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.models.errors import NotFoundError
from core.repositories.record_repository import ImageRecordRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import ERROR_CODE_IMAGE_NOT_FOUND
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class DeleteService:
    """Application service responsible for deleting images.

    This service orchestrates:
    - Validation that the image exists and belongs to the caller
    - Removal of the record from the database
    - Best-effort removal of the stored file

    It does not perform low-level infrastructure operations directly.
    """

    def __init__(
        self,
        store: ImageRecordRepository | None = None,
        storage: ImageStorageRepository | None = None,
    ) -> None:
        """Initialize the delete service with required infrastructure dependencies."""
        self.store = store or DynamoDBImageStore()
        self.storage = storage or S3ImageStorage()

    def delete_image(self, image_id: str, user_id: str) -> dict[str, Any]:
        """Delete an owned image.

        The deletion flow is:
        1. Fetch the record to confirm ownership and obtain the storage key
        2. Remove the record
        3. Remove the stored file, if the service stored one

        Args:
            image_id: Unique identifier of the image to delete
            user_id: Authenticated owner

        Returns:
            A dictionary containing deletion confirmation details

        Raises:
            NotFoundError: If the image does not exist or has another owner
            MetadataOperationFailedError: If record deletion fails
        """
        logger.debug(
            "Starting image deletion",
            extra={"image_id": image_id, "user_id": user_id},
        )

        # Step 1: Confirm ownership and locate the stored file
        record = self.store.fetch_record(image_id=image_id, user_id=user_id)

        if record is None:
            logger.warning(
                "Image not found",
                extra={"image_id": image_id, "user_id": user_id},
            )
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"image_id": image_id},
            )

        # Step 2: Remove the record
        self.store.remove_record(image_id=image_id, user_id=user_id)

        # Step 3: Remove the stored file; URL-only images have none
        storage_key = record.get("storage_key")
        if isinstance(storage_key, str) and storage_key:
            try:
                self.storage.remove_file(key=storage_key)
            except Exception:
                logger.warning(
                    "Stored image could not be removed",
                    extra={"image_id": image_id, "storage_key": storage_key},
                )

        logger.info("Image deleted successfully", extra={"image_id": image_id})

        return {
            "image_id": image_id,
            "storage_key": storage_key,
            "deleted_at": utc_now_iso(),
        }

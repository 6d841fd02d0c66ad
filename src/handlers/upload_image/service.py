"""Business logic for image upload operations.

This module coordinates normalization, storage, and record persistence
for image uploads while translating failures into domain-specific errors.
"""

import uuid
from typing import Any

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_image_store import DynamoDBImageStore
from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.models.errors import MetadataOperationFailedError
from core.models.image import ImageRecord
from core.models.upload import UploadedFile
from core.normalizers.upload_normalizer import UploadNormalizer
from core.repositories.record_repository import ImageRecordRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import ERROR_CODE_METADATA_CREATE_FAILED
from core.utils.settings import UploadSettings
from core.utils.time import utc_now_iso

Record = dict[str, Any]

logger = Logger(UTC=True)


class UploadService:
    """Application service responsible for image uploads.

    This service orchestrates:
    - Normalizing the inbound file, data URI or URL
    - Writing image bytes to storage
    - Persisting the image record
    - Removing the stored file if the record cannot be persisted
    """

    def __init__(
        self,
        store: ImageRecordRepository | None = None,
        storage: ImageStorageRepository | None = None,
        settings: UploadSettings | None = None,
    ) -> None:
        """Initialize the upload service with required infrastructure dependencies."""
        self.settings = settings or UploadSettings.from_env()
        self.storage = storage or S3ImageStorage(public_url_prefix=self.settings.public_url_prefix)
        self.store = store or DynamoDBImageStore()
        self.normalizer = UploadNormalizer(self.storage, self.settings)

    @staticmethod
    def generate_image_id() -> str:
        """Generate a unique image identifier."""
        return f"img_{uuid.uuid4().hex}"

    def create_image(
        self,
        *,
        user_id: str,
        title: str,
        src: str | None = None,
        file: UploadedFile | None = None,
    ) -> Record:
        """Store an image and persist its record.

        The upload flow is:
        1. Normalize the location (validates type and size, writes bytes)
        2. Build the image record
        3. Persist the record
        4. Remove the stored file if persistence fails

        Args:
            user_id: Authenticated owner of the image
            title: Image title
            src: Base64 data URI or plain URL
            file: Raw uploaded file

        Returns:
            Persisted image record

        Raises:
            ValidationError: If the location is missing or invalid
            ImageUploadFailedError: If storage write fails
            MetadataOperationFailedError: If record persistence fails
        """
        logger.debug("Starting image upload", extra={"user_id": user_id})

        # Step 1: Normalize location
        if file is not None:
            location = self.normalizer.from_file(user_id=user_id, upload=file)
        else:
            location = self.normalizer.from_source(user_id=user_id, src=src or "")

        # Step 2: Build record
        image_id = self.generate_image_id()

        record: Record = ImageRecord(
            image_id=image_id,
            user_id=user_id,
            title=title,
            file_name=location.file_name,
            file_url=location.file_url,
            storage_key=location.storage_key,
            mime_type=location.mime_type,
            file_size=location.file_size,
            created_at=utc_now_iso(),
            updated_at=None,
        ).model_dump()

        # Step 3: Persist record (remove stored file on failure)
        try:
            self.store.create_record(record=record)
        except Exception as exc:
            logger.exception("Failed to persist image record")
            self.normalizer.discard(location)

            raise MetadataOperationFailedError(
                message="Unable to save image record",
                error_code=ERROR_CODE_METADATA_CREATE_FAILED,
                details={"image_id": image_id},
            ) from exc

        logger.info(
            "Image uploaded successfully",
            extra={"image_id": image_id, "user_id": user_id, "stored": location.is_stored},
        )
        return record

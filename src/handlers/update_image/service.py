"""Business logic for partial image updates.

Only the supplied fields change. A replacement image goes through the
same normalization as an upload; the previously stored file is removed
once the record points at the new one.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_image_store import DynamoDBImageStore
from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.models.errors import NotFoundError
from core.models.upload import StoredLocation, UploadedFile
from core.normalizers.upload_normalizer import UploadNormalizer
from core.repositories.record_repository import ImageRecordRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import ERROR_CODE_IMAGE_NOT_FOUND
from core.utils.settings import UploadSettings
from core.utils.time import utc_now_iso

Record = dict[str, Any]

logger = Logger(UTC=True)


class UpdateService:
    """Application service responsible for editing images."""

    def __init__(
        self,
        store: ImageRecordRepository | None = None,
        storage: ImageStorageRepository | None = None,
        settings: UploadSettings | None = None,
    ) -> None:
        self.settings = settings or UploadSettings.from_env()
        self.storage = storage or S3ImageStorage(public_url_prefix=self.settings.public_url_prefix)
        self.store = store or DynamoDBImageStore()
        self.normalizer = UploadNormalizer(self.storage, self.settings)

    def update_image(
        self,
        *,
        image_id: str,
        user_id: str,
        title: str | None = None,
        src: str | None = None,
        file: UploadedFile | None = None,
    ) -> Record:
        """Apply a partial update to an owned image.

        A `src` equal to the current public URL is not a new location.
        When nothing changes the current record is returned untouched.

        Raises:
            NotFoundError: If the image does not exist or has another owner
            ValidationError: If the replacement image is invalid
            ImageUploadFailedError: If storing the replacement fails
            MetadataOperationFailedError: If the record update fails
        """
        current = self.store.fetch_record(image_id=image_id, user_id=user_id)

        if current is None:
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details={"image_id": image_id},
            )

        changes: Record = {}

        if title is not None and title != current.get("title"):
            changes["title"] = title

        location = self._resolve_location(current, user_id=user_id, src=src, file=file)

        if location is not None:
            changes.update(
                file_name=location.file_name,
                file_url=location.file_url,
                storage_key=location.storage_key,
                mime_type=location.mime_type,
                file_size=location.file_size,
            )

        if not changes:
            logger.debug("No changes to apply", extra={"image_id": image_id})
            return current

        changes["updated_at"] = utc_now_iso()

        try:
            updated = self.store.update_record(
                image_id=image_id,
                user_id=user_id,
                changes=changes,
            )
        except Exception:
            if location is not None:
                self.normalizer.discard(location)
            raise

        if location is not None:
            self._discard_previous(current, location)

        logger.info(
            "Image updated successfully",
            extra={"image_id": image_id, "fields": sorted(changes)},
        )
        return updated

    def _resolve_location(
        self,
        current: Record,
        *,
        user_id: str,
        src: str | None,
        file: UploadedFile | None,
    ) -> StoredLocation | None:
        if file is not None:
            return self.normalizer.from_file(user_id=user_id, upload=file)

        if src is None or src.strip() == current.get("file_url"):
            return None

        return self.normalizer.from_source(user_id=user_id, src=src)

    def _discard_previous(self, current: Record, location: StoredLocation) -> None:
        previous_key = current.get("storage_key")

        if not previous_key or previous_key == location.storage_key:
            return

        self.normalizer.discard(
            StoredLocation(
                file_name=current.get("file_name") or "",
                file_url=current.get("file_url") or "",
                storage_key=previous_key,
            )
        )

"""
Business logic for image retrieval.
"""

from typing import Any

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_image_store import DynamoDBImageStore
from core.models.errors import NotFoundError
from core.repositories.record_repository import ImageRecordRepository
from core.utils.constants import ERROR_CODE_IMAGE_NOT_FOUND

Record = dict[str, Any]

logger = Logger(UTC=True)


class GetService:
    """Application service responsible for retrieving a single image."""

    def __init__(self, store: ImageRecordRepository | None = None) -> None:
        self.store = store or DynamoDBImageStore()

    def get_image(self, image_id: str, user_id: str) -> Record:
        """
        Return the caller's image record.

        Records owned by other users are reported as missing so their
        existence is not disclosed.

        Raises:
            NotFoundError: If no record with this id belongs to the user
            MetadataOperationFailedError: If the record store fails
        """
        logger.debug(
            "Fetching image",
            extra={"image_id": image_id, "user_id": user_id},
        )

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

        return record

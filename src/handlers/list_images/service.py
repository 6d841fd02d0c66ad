"""Business logic for listing a user's images."""

from typing import Any

from aws_lambda_powertools import Logger

from core.infrastructure.aws.dynamodb_image_store import DynamoDBImageStore
from core.repositories.record_repository import ImageRecordRepository

Record = dict[str, Any]

logger = Logger(UTC=True)


class ListService:
    """Application service responsible for listing images.

    Records come back from the store oldest first; malformed items are
    left to the handler to skip.
    """

    def __init__(self, store: ImageRecordRepository | None = None) -> None:
        self.store = store or DynamoDBImageStore()

    def list_images(self, user_id: str) -> list[Record]:
        """Return every record owned by `user_id`, in creation order."""
        records = self.store.list_user_records(user_id=user_id)

        # ISO-8601 UTC strings sort chronologically
        records = sorted(records, key=lambda item: str(item.get("created_at", "")))

        logger.debug(
            "Listed user images",
            extra={"user_id": user_id, "count": len(records)},
        )
        return records

"""Image records in DynamoDB, always read and written on behalf of one owner."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Key
from botocore.exceptions import ClientError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import DynamoDBError, ImageServiceError, NotFoundError
from core.repositories.record_repository import ImageRecordRepository
from core.utils.constants import (
    ERROR_CODE_IMAGE_NOT_FOUND,
    ERROR_CODE_METADATA_CREATE_FAILED,
    ERROR_CODE_METADATA_DELETE_FAILED,
    ERROR_CODE_METADATA_FETCH_FAILED,
    ERROR_CODE_METADATA_LIST_FAILED,
    ERROR_CODE_METADATA_UPDATE_FAILED,
    USER_CREATED_INDEX,
)

Record = dict[str, Any]

logger = Logger(UTC=True)

NEW_RECORD_CONDITION = "attribute_not_exists(image_id)"
OWNED_RECORD_CONDITION = "attribute_exists(image_id) AND user_id = :owner"

REQUIRED_FIELDS = ("image_id", "user_id", "title")
IMMUTABLE_FIELDS = frozenset({"image_id", "user_id", "created_at"})


def _is_condition_failure(exc: Exception) -> bool:
    return (
        isinstance(exc, ClientError)
        and exc.response.get("Error", {}).get("Code") == "ConditionalCheckFailedException"
    )


@contextmanager
def _dynamodb_errors(
    message: str,
    error_code: str,
    *,
    owned: bool = False,
    **details: Any,
) -> Iterator[None]:
    """Turn boto errors into DynamoDBError.

    With `owned`, a failed ownership condition becomes NotFoundError.
    """
    try:
        yield
    except ImageServiceError:
        raise
    except Exception as exc:
        if owned and _is_condition_failure(exc):
            raise NotFoundError(
                message="Image not found",
                error_code=ERROR_CODE_IMAGE_NOT_FOUND,
                details=details,
            ) from exc

        logger.exception(message, extra=details)
        raise DynamoDBError(message=message, error_code=error_code, details=details) from exc


class DynamoDBImageStore(ImageRecordRepository):
    """Record store on a table keyed by `image_id`.

    Listing uses the `user-created-index` GSI (`user_id`, `created_at`).
    Writes to existing records are conditional on the owner, so a record of
    another user behaves exactly like a missing one.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol | None = None) -> None:
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter()

    def create_record(self, *, record: Record) -> None:
        for field in REQUIRED_FIELDS:
            value = record.get(field)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"record must contain non-empty '{field}' (string)")

        image_id = record["image_id"]

        with _dynamodb_errors(
            "Unable to save image record at this time",
            ERROR_CODE_METADATA_CREATE_FAILED,
            image_id=image_id,
        ):
            self._db.put_item(item=record, condition_expression=NEW_RECORD_CONDITION)

        logger.info("Image record created", extra={"image_id": image_id, "user_id": record["user_id"]})

    def fetch_record(self, *, image_id: str, user_id: str) -> Record | None:
        with _dynamodb_errors(
            "Unable to retrieve image record",
            ERROR_CODE_METADATA_FETCH_FAILED,
            image_id=image_id,
        ):
            item = self._db.get_item(key={"image_id": image_id}).get("Item")

        if item is None:
            return None

        if not isinstance(item, dict):
            raise DynamoDBError(
                message="Invalid image record format",
                error_code=ERROR_CODE_METADATA_FETCH_FAILED,
                details={"image_id": image_id},
            )

        if item.get("user_id") != user_id:
            logger.warning("Image requested by non-owner", extra={"image_id": image_id, "user_id": user_id})
            return None

        return item

    def update_record(self, *, image_id: str, user_id: str, changes: Record) -> Record:
        if not changes:
            raise ValueError("changes must not be empty")

        immutable = IMMUTABLE_FIELDS.intersection(changes)
        if immutable:
            raise ValueError(f"cannot update immutable fields: {', '.join(sorted(immutable))}")

        # Placeholders keep reserved words such as `title` out of the expression
        names = {f"#f{i}": field for i, field in enumerate(changes)}
        values: dict[str, Any] = {f":v{i}": value for i, value in enumerate(changes.values())}
        values[":owner"] = user_id

        with _dynamodb_errors(
            "Unable to update image record",
            ERROR_CODE_METADATA_UPDATE_FAILED,
            owned=True,
            image_id=image_id,
        ):
            response = self._db.update_item(
                key={"image_id": image_id},
                UpdateExpression="SET " + ", ".join(f"{name} = :v{i}" for i, name in enumerate(names)),
                ConditionExpression=OWNED_RECORD_CONDITION,
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues="ALL_NEW",
            )

        logger.info("Image record updated", extra={"image_id": image_id, "fields": sorted(changes)})

        attributes: Record = response.get("Attributes") or {}
        return attributes

    def remove_record(self, *, image_id: str, user_id: str) -> None:
        with _dynamodb_errors(
            "Unable to delete image record",
            ERROR_CODE_METADATA_DELETE_FAILED,
            owned=True,
            image_id=image_id,
        ):
            self._db.delete_item(
                key={"image_id": image_id},
                ConditionExpression=OWNED_RECORD_CONDITION,
                ExpressionAttributeValues={":owner": user_id},
            )

        logger.info("Image record removed", extra={"image_id": image_id})

    def list_user_records(self, *, user_id: str) -> list[Record]:
        """All of the owner's records, oldest first, across every result page."""
        query: dict[str, Any] = {
            "IndexName": USER_CREATED_INDEX,
            "KeyConditionExpression": Key("user_id").eq(user_id),
            "ScanIndexForward": True,
        }
        items: list[Record] = []

        with _dynamodb_errors(
            "Unable to list images for this user",
            ERROR_CODE_METADATA_LIST_FAILED,
            user_id=user_id,
        ):
            while True:
                response = self._db.query(**query)
                page = response.get("Items", [])

                if not isinstance(page, list):
                    raise DynamoDBError(
                        message="Invalid query response from DynamoDB",
                        error_code=ERROR_CODE_METADATA_LIST_FAILED,
                        details={"user_id": user_id},
                    )

                items.extend(page)

                if not response.get("LastEvaluatedKey"):
                    break
                query["ExclusiveStartKey"] = response["LastEvaluatedKey"]

        logger.debug("Listed image records", extra={"user_id": user_id, "count": len(items)})
        return items

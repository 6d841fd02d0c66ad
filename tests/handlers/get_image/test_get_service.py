from unittest.mock import patch

import pytest

from core.models.errors import DynamoDBError, NotFoundError
from handlers.get_image.service import GetService


class TestGetService:
    def test_get_owned_image(self, dynamodb_put_item, sample_image_record) -> None:
        dynamodb_put_item(sample_image_record)

        record = GetService().get_image("img_1", "john")

        assert record["image_id"] == "img_1"
        assert record["title"] == "Sunset"
        assert record["user_id"] == "john"

    def test_missing_image(self, dynamodb_table) -> None:
        with pytest.raises(NotFoundError):
            GetService().get_image("img_missing", "john")

    def test_other_owner_is_not_found(self, dynamodb_put_item, sample_image_record) -> None:
        dynamodb_put_item(sample_image_record)

        with pytest.raises(NotFoundError):
            GetService().get_image("img_1", "alice")

    def test_store_failure_propagates(self, dynamodb_table) -> None:
        service = GetService()

        with patch.object(
            service.store,
            "fetch_record",
            side_effect=DynamoDBError(message="DynamoDB down"),
        ):
            with pytest.raises(DynamoDBError):
                service.get_image("img_1", "john")

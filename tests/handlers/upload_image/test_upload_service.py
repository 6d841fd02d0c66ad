import base64
from unittest.mock import MagicMock

import pytest

from core.models.errors import (
    DynamoDBError,
    FileSizeError,
    ImageUploadFailedError,
    MetadataOperationFailedError,
    MIMETypeError,
    ValidationError,
)
from core.models.upload import UploadedFile
from core.utils.settings import UploadSettings
from handlers.upload_image.service import UploadService


def make_storage() -> MagicMock:
    storage = MagicMock()
    storage.store_file.side_effect = lambda *, user_id, file_name, file_data, mime_type: (
        f"images/{user_id}/{file_name}"
    )
    storage.public_url.side_effect = lambda *, key: f"https://cdn.example.com/{key}"
    return storage


@pytest.fixture
def storage() -> MagicMock:
    return make_storage()


@pytest.fixture
def store() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(store, storage) -> UploadService:
    return UploadService(
        store=store,
        storage=storage,
        settings=UploadSettings(max_size_kb=1, public_url_prefix="https://cdn.example.com"),
    )


class TestUploadService:
    def test_generate_image_id(self) -> None:
        id1 = UploadService.generate_image_id()
        id2 = UploadService.generate_image_id()

        assert id1.startswith("img_")
        assert id2.startswith("img_")
        assert id1 != id2

    def test_create_from_data_uri(self, service, store, storage) -> None:
        record = service.create_image(
            user_id="john",
            title="Sunset",
            src="data:image/jpeg;base64,QUJD",
        )

        assert record["user_id"] == "john"
        assert record["title"] == "Sunset"
        assert record["file_name"].endswith(".jpg")
        assert record["file_url"] == f"https://cdn.example.com/{record['storage_key']}"
        assert record["mime_type"] == "image/jpeg"
        assert record["file_size"] == 3
        assert record["updated_at"] is None

        storage.store_file.assert_called_once()
        assert storage.store_file.call_args.kwargs["file_data"] == b"ABC"
        store.create_record.assert_called_once_with(record=record)

    def test_create_from_url_stores_nothing(self, service, store, storage) -> None:
        record = service.create_image(
            user_id="john",
            title="Remote",
            src="https://example.org/photos/cat.png",
        )

        assert record["file_url"] == "https://example.org/photos/cat.png"
        assert record["file_name"] == "cat.png"
        assert record["storage_key"] is None
        storage.store_file.assert_not_called()
        store.create_record.assert_called_once()

    def test_create_from_file_keeps_original_name(
        self, service, storage, sample_image_binary
    ) -> None:
        upload = UploadedFile(file_name="holiday.png", content_type="image/png", data=sample_image_binary)

        record = service.create_image(user_id="john", title="Holiday", file=upload)

        assert record["file_name"] == "holiday.png"
        assert record["storage_key"].startswith("images/john/")
        assert record["storage_key"].endswith(".png")
        assert record["mime_type"] == "image/png"

    def test_oversized_upload_creates_no_record(self, service, store, storage) -> None:
        payload = base64.b64encode(b"x" * 2048).decode()

        with pytest.raises(FileSizeError):
            service.create_image(user_id="john", title="Big", src=f"data:image/png;base64,{payload}")

        storage.store_file.assert_not_called()
        store.create_record.assert_not_called()

    def test_rejects_disallowed_extension(self, service, store) -> None:
        with pytest.raises(MIMETypeError):
            service.create_image(user_id="john", title="Bad", src="data:image/bmp;base64,QUJD")

        store.create_record.assert_not_called()

    def test_rejects_malformed_base64(self, service, store) -> None:
        with pytest.raises(ValidationError):
            service.create_image(user_id="john", title="Bad", src="data:image/png;base64,@@@")

        store.create_record.assert_not_called()

    def test_storage_failure_propagates(self, service, store, storage) -> None:
        storage.store_file.side_effect = ImageUploadFailedError(message="S3 down")

        with pytest.raises(ImageUploadFailedError):
            service.create_image(user_id="john", title="Sunset", src="data:image/png;base64,QUJD")

        store.create_record.assert_not_called()

    def test_record_failure_removes_stored_file(self, service, store, storage) -> None:
        store.create_record.side_effect = DynamoDBError(message="DynamoDB down")

        with pytest.raises(MetadataOperationFailedError):
            service.create_image(user_id="john", title="Sunset", src="data:image/png;base64,QUJD")

        stored_key = storage.store_file.call_args.kwargs["file_name"]
        storage.remove_file.assert_called_once_with(key=f"images/john/{stored_key}")

    def test_record_failure_survives_cleanup_failure(self, service, store, storage) -> None:
        store.create_record.side_effect = DynamoDBError(message="DynamoDB down")
        storage.remove_file.side_effect = Exception("S3 down too")

        with pytest.raises(MetadataOperationFailedError):
            service.create_image(user_id="john", title="Sunset", src="data:image/png;base64,QUJD")

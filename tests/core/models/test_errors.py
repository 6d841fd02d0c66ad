"""
Unit tests for core.models.errors
"""

import pytest

from core.models.errors import (
    AuthenticationError,
    DynamoDBError,
    FileSizeError,
    ImageDeletionFailedError,
    ImageServiceError,
    ImageUploadFailedError,
    MetadataOperationFailedError,
    MIMETypeError,
    NotFoundError,
    S3Error,
    ValidationError,
)


class TestImageServiceError:
    def test_base_error(self) -> None:
        err = ImageServiceError(message="Something went wrong", error_code="TEST_ERROR", details={"foo": "bar"})

        assert err.message == "Something went wrong"
        assert err.error_code == "TEST_ERROR"
        assert err.details == {"foo": "bar"}
        assert str(err) == "Something went wrong"

    def test_defaults(self) -> None:
        err = ImageServiceError(message="m")

        assert err.error_code == "INTERNAL_ERROR"
        assert err.details == {}

    def test_arguments_are_keyword_only(self) -> None:
        with pytest.raises(TypeError):
            ImageServiceError("m", "E")  # type: ignore[misc]


@pytest.mark.parametrize(
    "cls,parent,code",
    [
        (ValidationError, ImageServiceError, "VALIDATION_FAILED"),
        (MIMETypeError, ValidationError, "UNSUPPORTED_MIME_TYPE"),
        (FileSizeError, ValidationError, "FILE_SIZE_EXCEEDED"),
        (AuthenticationError, ImageServiceError, "UNAUTHORIZED"),
        (NotFoundError, ImageServiceError, "NOT_FOUND"),
        (MetadataOperationFailedError, ImageServiceError, "METADATA_OPERATION_FAILED"),
        (DynamoDBError, MetadataOperationFailedError, "DYNAMODB_ERROR"),
        (S3Error, ImageServiceError, "S3_ERROR"),
        (ImageUploadFailedError, S3Error, "IMAGE_UPLOAD_FAILED"),
        (ImageDeletionFailedError, S3Error, "IMAGE_DELETE_FAILED"),
    ],
)
def test_hierarchy_and_default_codes(cls, parent, code) -> None:
    err = cls(message="failure")

    assert isinstance(err, parent)
    assert err.error_code == code


def test_error_code_can_be_overridden() -> None:
    err = NotFoundError(message="Image not found", error_code="IMAGE_NOT_FOUND", details={"image_id": "img_1"})

    assert err.error_code == "IMAGE_NOT_FOUND"
    assert err.details == {"image_id": "img_1"}

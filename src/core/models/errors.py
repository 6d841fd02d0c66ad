"""Exceptions raised by the gallery services.

Each class carries a default `error_code`; handlers map the classes onto
HTTP statuses through `ResponseBuilder.from_service_error`.
"""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_DYNAMODB,
    ERROR_CODE_FILE_SIZE_EXCEEDED,
    ERROR_CODE_IMAGE_DELETE_FAILED,
    ERROR_CODE_IMAGE_UPLOAD_FAILED,
    ERROR_CODE_INTERNAL_ERROR,
    ERROR_CODE_METADATA_OPERATION_FAILED,
    ERROR_CODE_RESOURCE_NOT_FOUND,
    ERROR_CODE_S3,
    ERROR_CODE_UNAUTHORIZED,
    ERROR_CODE_UNSUPPORTED_MIME_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
)


class ImageServiceError(Exception):
    """Base class of every gallery error.

    Args:
        message: Human readable message, returned to the client
        error_code: Machine readable code, defaults to the class code
        details: Extra context included in the error body
    """

    default_error_code: str = ERROR_CODE_INTERNAL_ERROR

    def __init__(
        self,
        *,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details: dict[str, Any] = details or {}

        super().__init__(message)


# 422


class ValidationError(ImageServiceError):
    """The request or uploaded content is not acceptable."""

    default_error_code = ERROR_CODE_VALIDATION_FAILED


class MIMETypeError(ValidationError):
    """Image type or extension is not allowed."""

    default_error_code = ERROR_CODE_UNSUPPORTED_MIME_TYPE


class FileSizeError(ValidationError):
    """Image is larger than the configured limit."""

    default_error_code = ERROR_CODE_FILE_SIZE_EXCEEDED


# 401 / 404


class AuthenticationError(ImageServiceError):
    default_error_code = ERROR_CODE_UNAUTHORIZED


class NotFoundError(ImageServiceError):
    """Image does not exist or belongs to someone else."""

    default_error_code = ERROR_CODE_RESOURCE_NOT_FOUND


# 500


class MetadataOperationFailedError(ImageServiceError):
    """An image record could not be read or written."""

    default_error_code = ERROR_CODE_METADATA_OPERATION_FAILED


class DynamoDBError(MetadataOperationFailedError):
    default_error_code = ERROR_CODE_DYNAMODB


class S3Error(ImageServiceError):
    """An image file could not be written or removed."""

    default_error_code = ERROR_CODE_S3


class ImageUploadFailedError(S3Error):
    default_error_code = ERROR_CODE_IMAGE_UPLOAD_FAILED


class ImageDeletionFailedError(S3Error):
    default_error_code = ERROR_CODE_IMAGE_DELETE_FAILED

"""Names and limits shared across the gallery service."""

from typing import Final

# --- Error codes (the `error` field of error bodies) -----------------------

ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_UNSUPPORTED_MIME_TYPE = "UNSUPPORTED_MIME_TYPE"
ERROR_CODE_FILE_SIZE_EXCEEDED = "FILE_SIZE_EXCEEDED"
ERROR_CODE_INVALID_IMAGE_SOURCE = "INVALID_IMAGE_SOURCE"

ERROR_CODE_UNAUTHORIZED = "UNAUTHORIZED"

ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_IMAGE_NOT_FOUND = "IMAGE_NOT_FOUND"

ERROR_CODE_S3 = "S3_ERROR"
ERROR_CODE_IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"
ERROR_CODE_IMAGE_DELETE_FAILED = "IMAGE_DELETE_FAILED"

ERROR_CODE_DYNAMODB = "DYNAMODB_ERROR"
ERROR_CODE_METADATA_OPERATION_FAILED = "METADATA_OPERATION_FAILED"
ERROR_CODE_METADATA_CREATE_FAILED = "METADATA_CREATE_FAILED"
ERROR_CODE_METADATA_FETCH_FAILED = "METADATA_FETCH_FAILED"
ERROR_CODE_METADATA_UPDATE_FAILED = "METADATA_UPDATE_FAILED"
ERROR_CODE_METADATA_DELETE_FAILED = "METADATA_DELETE_FAILED"
ERROR_CODE_METADATA_LIST_FAILED = "METADATA_LIST_FAILED"

ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"

# --- Uploads ---------------------------------------------------------------

DEFAULT_MAX_SIZE_KB = 2048
DEFAULT_ALLOWED_EXTENSIONS: Final[frozenset[str]] = frozenset({"jpeg", "png", "jpg", "gif"})

# First extension is the one used for generated names
MIME_TYPE_EXTENSION_MAP: Final[dict[str, tuple[str, ...]]] = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/gif": ("gif",),
}
EXTENSION_MIME_TYPE_MAP: Final[dict[str, str]] = {
    ext: mime for mime, extensions in MIME_TYPE_EXTENSION_MAP.items() for ext in extensions
}

# Declared types that say nothing; the bytes are sniffed instead
GENERIC_CONTENT_TYPES: Final[frozenset[str]] = frozenset(
    {"", "application/octet-stream", "binary/octet-stream"}
)

DATA_URI_PATTERN = r"^data:image/(?P<ext>[A-Za-z0-9.+-]+);base64,(?P<payload>.*)$"

# images/<user_id>/<16 alphanumerics>.<ext>
STORAGE_KEY_PREFIX = "images"
STORAGE_NAME_LENGTH = 16

# --- Image records ---------------------------------------------------------

TITLE_MAX_LENGTH = 255
IMAGE_ID_MAX_LENGTH = 128
IMAGE_ID_PATTERN = r"^[A-Za-z0-9_-]+$"
USER_CREATED_INDEX = "user-created-index"

# --- HTTP ------------------------------------------------------------------

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,PUT,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"
MULTIPART_CONTENT_TYPE = "multipart/form-data"

# --- Environment variables -------------------------------------------------

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_IMAGE_S3_BUCKET_NAME = "IMAGE_S3_BUCKET_NAME"
ENV_IMAGE_METADATA_TABLE_NAME = "IMAGE_METADATA_TABLE_NAME"
ENV_IMAGE_PUBLIC_URL_PREFIX = "IMAGE_PUBLIC_URL_PREFIX"
ENV_IMAGE_MAX_SIZE_KB = "IMAGE_MAX_SIZE_KB"
ENV_IMAGE_ALLOWED_EXTENSIONS = "IMAGE_ALLOWED_EXTENSIONS"

"""
Conversion of inbound image representations into stored locations.

Three inputs are accepted:
- a raw file (multipart or Base64 JSON) with a declared MIME type
- a `data:image/<ext>;base64,<payload>` URI
- a plain URL, which is passed through untouched

Files and data URIs are written to storage under a random 16 character
name that keeps the image extension; the returned location carries the
public URL the image is served from.
"""

import base64
import binascii
import re
import secrets
import string
from pathlib import PurePosixPath
from urllib.parse import unquote, urlparse

from aws_lambda_powertools import Logger

from core.models.errors import FileSizeError, MIMETypeError, ValidationError
from core.models.upload import StoredLocation, UploadedFile
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    DATA_URI_PATTERN,
    ERROR_CODE_INVALID_IMAGE_SOURCE,
    EXTENSION_MIME_TYPE_MAP,
    GENERIC_CONTENT_TYPES,
    STORAGE_NAME_LENGTH,
)
from core.utils.mime import detect_mime_type, extension_for, mime_type_for, normalize_extension
from core.utils.settings import UploadSettings

logger = Logger(UTC=True)

_DATA_URI_RE = re.compile(DATA_URI_PATTERN, re.DOTALL)
_NAME_ALPHABET = string.ascii_letters + string.digits


def generate_storage_name(extension: str) -> str:
    """Return `<16 random alphanumerics>.<extension>`."""
    stem = "".join(secrets.choice(_NAME_ALPHABET) for _ in range(STORAGE_NAME_LENGTH))
    return f"{stem}.{extension}"


class UploadNormalizer:
    """Turns whatever the client sent for "the image" into a StoredLocation."""

    def __init__(self, storage: ImageStorageRepository, settings: UploadSettings) -> None:
        self.storage = storage
        self.settings = settings

    def from_file(self, *, user_id: str, upload: UploadedFile) -> StoredLocation:
        """Validate and store a raw uploaded file.

        Raises:
            ValidationError: If the file is empty
            MIMETypeError: If the type or extension is not allowed, or they disagree
            FileSizeError: If the file exceeds the configured limit
            ImageUploadFailedError: If the storage write fails
        """
        self._check_size(upload.data)

        mime_type = self._resolve_mime_type(upload)
        extension = self._file_extension(upload, mime_type)
        self._check_extension(extension)

        return self._store(
            user_id=user_id,
            file_name=upload.file_name,
            storage_name=generate_storage_name(extension),
            file_data=upload.data,
            mime_type=mime_type,
        )

    def from_source(self, *, user_id: str, src: str) -> StoredLocation:
        """Store a Base64 data URI, or pass a URL through unchanged.

        Raises:
            ValidationError: If the source is empty or a malformed data URI
            MIMETypeError: If the data URI's image type is not allowed
            FileSizeError: If the decoded payload exceeds the configured limit
            ImageUploadFailedError: If the storage write fails
        """
        src = src.strip()

        if not src:
            raise ValidationError(
                message="Image source must not be empty",
                error_code=ERROR_CODE_INVALID_IMAGE_SOURCE,
                details={"field": "src"},
            )

        match = _DATA_URI_RE.match(src)

        if match is None:
            if src.lower().startswith("data:"):
                raise ValidationError(
                    message="Image data URI must match data:image/<ext>;base64,<payload>",
                    error_code=ERROR_CODE_INVALID_IMAGE_SOURCE,
                    details={"field": "src"},
                )
            return self._passthrough(src)

        extension = normalize_extension(match.group("ext"))
        self._check_extension(extension)

        try:
            file_data = base64.b64decode(match.group("payload").strip(), validate=True)
        except (binascii.Error, ValueError) as exc:
            logger.warning("Rejected malformed Base64 payload", extra={"user_id": user_id})
            raise ValidationError(
                message="Image data is not valid Base64",
                error_code=ERROR_CODE_INVALID_IMAGE_SOURCE,
                details={"field": "src", "encoding": "base64"},
            ) from exc

        self._check_size(file_data)

        storage_name = generate_storage_name(extension)

        return self._store(
            user_id=user_id,
            file_name=storage_name,
            storage_name=storage_name,
            file_data=file_data,
            mime_type=mime_type_for(extension),
        )

    def discard(self, location: StoredLocation) -> None:
        """Best-effort removal of a stored file; never raises."""
        if location.storage_key is None:
            return

        try:
            self.storage.remove_file(key=location.storage_key)
        except Exception:
            logger.warning(
                "Failed to clean up stored image",
                extra={"storage_key": location.storage_key},
            )

    def _check_size(self, file_data: bytes) -> None:
        if not file_data:
            raise ValidationError(
                message="Image file is empty",
                details={"file_size": 0},
            )

        if len(file_data) > self.settings.max_size_bytes:
            logger.warning(
                "Image exceeds size limit",
                extra={"file_size": len(file_data), "max_size_kb": self.settings.max_size_kb},
            )
            raise FileSizeError(
                message=f"File size exceeds {self.settings.max_size_kb}KB limit",
                details={
                    "file_size": len(file_data),
                    "max_size_kb": self.settings.max_size_kb,
                },
            )

    def _check_extension(self, extension: str) -> None:
        if normalize_extension(extension) not in self.settings.accepted_extensions:
            raise MIMETypeError(
                message=f"Invalid image extension '{extension}'",
                details={
                    "extension": extension,
                    "allowed_extensions": sorted(self.settings.allowed_extensions),
                },
            )

    @staticmethod
    def _file_extension(upload: UploadedFile, mime_type: str) -> str:
        """The file name's extension, which must name the same type as the content."""
        suffix = PurePosixPath(upload.file_name).suffix.lower().lstrip(".")

        if not suffix:
            return extension_for(mime_type)

        if EXTENSION_MIME_TYPE_MAP.get(suffix) != mime_type:
            raise MIMETypeError(
                message=f"File extension '{suffix}' does not match image type '{mime_type}'",
                details={"extension": suffix, "mime_type": mime_type},
            )

        return suffix

    def _resolve_mime_type(self, upload: UploadedFile) -> str:
        declared = upload.content_type or ""

        if declared in GENERIC_CONTENT_TYPES:
            try:
                declared = detect_mime_type(upload.data)
            except ValueError as exc:
                raise MIMETypeError(
                    message="Unsupported image type",
                    details={"file_name": upload.file_name},
                ) from exc

        if declared not in self.settings.allowed_mime_types:
            raise MIMETypeError(
                message="Unsupported image type",
                details={
                    "mime_type": declared,
                    "allowed_mime_types": sorted(self.settings.allowed_mime_types),
                },
            )

        return declared

    def _store(
        self,
        *,
        user_id: str,
        file_name: str,
        storage_name: str,
        file_data: bytes,
        mime_type: str,
    ) -> StoredLocation:
        key = self.storage.store_file(
            user_id=user_id,
            file_name=storage_name,
            file_data=file_data,
            mime_type=mime_type,
        )

        return StoredLocation(
            file_name=file_name,
            file_url=self.storage.public_url(key=key),
            storage_key=key,
            mime_type=mime_type,
            file_size=len(file_data),
        )

    @staticmethod
    def _passthrough(src: str) -> StoredLocation:
        path = urlparse(src).path
        file_name = unquote(PurePosixPath(path).name) if path else ""

        return StoredLocation(file_name=file_name or src, file_url=src)

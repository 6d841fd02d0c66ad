"""Models describing an inbound file and where it ended up."""

import base64
import binascii
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UploadedFile(BaseModel):
    """Raw file received from the client.

    `data` accepts raw bytes (multipart uploads) or a Base64 string
    (JSON uploads).
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    file_name: str = Field(..., min_length=1, max_length=255, description="Original file name")
    content_type: str | None = Field(None, description="Declared MIME type")
    data: bytes = Field(..., description="File content")

    @field_validator("data", mode="before")
    @classmethod
    def decode_base64(cls, value: Any) -> Any:
        if isinstance(value, str):
            try:
                return base64.b64decode(value, validate=True)
            except (binascii.Error, ValueError) as exc:
                raise ValueError("Invalid base64 encoded file") from exc
        return value

    @field_validator("content_type")
    @classmethod
    def normalize_content_type(cls, value: str | None) -> str | None:
        if value is None:
            return None
        # Drop parameters such as "; charset=binary"
        return value.split(";", 1)[0].strip().lower() or None


class StoredLocation(BaseModel):
    """Normalized image location, ready to be persisted on a record."""

    file_name: str
    file_url: str
    storage_key: str | None = None
    mime_type: str | None = None
    file_size: int | None = None

    @property
    def is_stored(self) -> bool:
        """True when the bytes live in the service's storage."""
        return self.storage_key is not None

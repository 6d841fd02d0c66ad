"""Shared image models."""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, Field, StrictStr, StringConstraints, field_validator

from core.utils.constants import IMAGE_ID_MAX_LENGTH, IMAGE_ID_PATTERN, TITLE_MAX_LENGTH

# Identifier as it arrives in the `/images/{id}` path
ImageId = Annotated[
    StrictStr,
    StringConstraints(
        strip_whitespace=True,
        min_length=1,
        max_length=IMAGE_ID_MAX_LENGTH,
        pattern=IMAGE_ID_PATTERN,
    ),
]


class ImageRecord(BaseModel):
    """Image record as persisted in the record store."""

    image_id: StrictStr = Field(..., description="Unique image identifier")
    user_id: StrictStr = Field(..., min_length=1, description="Owner user identifier")
    title: StrictStr = Field(..., min_length=1, max_length=TITLE_MAX_LENGTH, description="Image title")

    file_name: StrictStr = Field(..., description="Original or generated file name")
    file_url: StrictStr = Field(..., description="Public URL the image is served from")

    storage_key: StrictStr | None = Field(None, description="Storage key when the bytes are stored by the service")
    mime_type: StrictStr | None = Field(None, description="MIME type of the stored bytes")
    file_size: int | None = Field(None, description="Size of the stored bytes")

    created_at: StrictStr = Field(..., description="ISO-8601 creation timestamp (UTC)")
    updated_at: StrictStr | None = Field(None, description="ISO-8601 last update timestamp (UTC)")

    @field_validator("file_size", mode="before")
    @classmethod
    def coerce_decimal(cls, value: Any) -> Any:
        # DynamoDB returns numbers as Decimal
        if isinstance(value, Decimal):
            return int(value)
        return value


class Image(BaseModel):
    """Image returned by the Image Gallery API."""

    id: StrictStr = Field(..., description="Unique image identifier")
    user_id: StrictStr = Field(..., description="Owner user identifier")
    title: StrictStr = Field(..., description="Image title")
    file_name: StrictStr = Field(..., description="Original or generated file name")
    file_url: StrictStr = Field(..., description="Public URL the image is served from")
    created_at: StrictStr = Field(..., description="ISO-8601 creation timestamp (UTC)")
    updated_at: StrictStr | None = Field(None, description="ISO-8601 last update timestamp (UTC)")

    @classmethod
    def from_record(cls, record: ImageRecord | dict[str, Any]) -> "Image":
        if isinstance(record, dict):
            record = ImageRecord(**record)

        return cls(
            id=record.image_id,
            user_id=record.user_id,
            title=record.title,
            file_name=record.file_name,
            file_url=record.file_url,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class ListImagesResponse(BaseModel):
    """Response for listing the caller's images."""

    images: list[Image] = Field(..., description="Images owned by the caller")

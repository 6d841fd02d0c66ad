"""Pydantic models for image update request."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.models.image import ImageId
from core.models.upload import UploadedFile
from core.utils.constants import TITLE_MAX_LENGTH


class UpdateImagePathParams(BaseModel):
    image_id: ImageId


class UpdateImageRequest(BaseModel):
    """Validation model for partial image updates.

    Every field is optional; omitted fields keep their stored value.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(
        None, min_length=1, max_length=TITLE_MAX_LENGTH, description="New image title"
    )
    src: str | None = Field(
        None, min_length=1, description="Replacement Base64 data URI or image URL"
    )
    file: UploadedFile | None = Field(None, description="Replacement image file")

    @model_validator(mode="after")
    def validate_location(self) -> "UpdateImageRequest":
        if self.src is not None and self.file is not None:
            raise ValueError("Provide either src or file, not both")
        return self

"""Pydantic models for image upload request."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.models.upload import UploadedFile
from core.utils.constants import TITLE_MAX_LENGTH


class ImageUploadRequest(BaseModel):
    """Validation model for image upload request.

    Exactly one location must be supplied:
    - `src`: Base64 data URI or plain URL
    - `file`: raw file (multipart part, or JSON object with Base64 `data`)
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(
        ..., min_length=1, max_length=TITLE_MAX_LENGTH, description="Image title"
    )
    src: str | None = Field(
        None, min_length=1, description="Base64 data URI or image URL"
    )
    file: UploadedFile | None = Field(None, description="Uploaded image file")

    @model_validator(mode="after")
    def validate_location(self) -> "ImageUploadRequest":
        if self.src is None and self.file is None:
            raise ValueError("Either src or file must be provided")

        if self.src is not None and self.file is not None:
            raise ValueError("Provide either src or file, not both")

        return self

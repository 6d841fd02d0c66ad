"""Request model for deleting an image."""

from pydantic import BaseModel

from core.models.image import ImageId


class DeleteImageRequest(BaseModel):
    image_id: ImageId

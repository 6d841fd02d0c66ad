"""Request model for fetching one image."""

from pydantic import BaseModel

from core.models.image import ImageId


class GetImageRequest(BaseModel):
    image_id: ImageId

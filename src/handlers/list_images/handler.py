"""
GET /images: the caller's images, oldest first.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.image import Image, ListImagesResponse
from core.utils.auth import get_authenticated_user_id
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

from .service import ListService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    user_id = get_authenticated_user_id(event)

    images: list[Image] = []

    for item in ListService().list_images(user_id):
        try:
            images.append(Image.from_record(item))
        except ValidationError:
            # One bad item must not hide the rest of the gallery
            logger.warning("Skipping malformed image record", extra={"image_id": item.get("image_id")})

    return ResponseBuilder.ok(ListImagesResponse(images=images).model_dump())

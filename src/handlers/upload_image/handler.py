"""
POST /images: store a new image for the caller.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.models.image import Image
from core.utils.auth import get_authenticated_user_id
from core.utils.decorators import api_gateway_handler
from core.utils.request import parse_image_payload
from core.utils.response import ResponseBuilder
from core.utils.validators import validate_request

from .models import ImageUploadRequest
from .service import UploadService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Create an image from the request body.

    Accepted bodies:
        JSON `{title, src}` where src is a data URI or a URL
        JSON `{title, file: {file_name, content_type, data}}` with Base64 data
        multipart/form-data with `title` and `file` parts

    Unreadable bodies are rejected with 400 and invalid content with 422,
    both by `api_gateway_handler`.
    """
    user_id = get_authenticated_user_id(event)
    request = validate_request(ImageUploadRequest, parse_image_payload(event))

    record = UploadService().create_image(
        user_id=user_id,
        title=request.title,
        src=request.src,
        file=request.file,
    )

    return ResponseBuilder.created(Image.from_record(record).model_dump())

"""
PUT or POST /images/{id}: change the title and/or the image of an existing record.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.image import Image
from core.utils.auth import get_authenticated_user_id
from core.utils.decorators import api_gateway_handler
from core.utils.request import get_path_image_id, parse_image_payload
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import UpdateImagePathParams, UpdateImageRequest
from .service import UpdateService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Apply a partial update. Body shapes match upload with every field optional;
    an empty body returns the image unchanged.

    A malformed id in the path is a 400; an invalid body is a 422.
    """
    user_id = get_authenticated_user_id(event)

    try:
        path = validate_request(UpdateImagePathParams, {"image_id": get_path_image_id(event)})
    except ValidationError as exc:
        errors = sanitize_validation_errors(list(exc.errors()))
        logger.warning("Invalid image id in path", extra={"errors": errors})
        return ResponseBuilder.bad_request(
            "Invalid request params",
            details={"errors": errors},
            request_id=getattr(context, "aws_request_id", None),
        )

    # Any id sent in the body is ignored; the path names the image
    request = validate_request(UpdateImageRequest, parse_image_payload(event))

    record = UpdateService().update_image(
        image_id=path.image_id,
        user_id=user_id,
        title=request.title,
        src=request.src,
        file=request.file,
    )

    logger.info("Image updated", extra={"image_id": path.image_id, "user_id": user_id})

    return ResponseBuilder.ok(Image.from_record(record).model_dump())

"""
GET /images/{id}: one image owned by the caller.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.models.image import Image
from core.utils.auth import get_authenticated_user_id
from core.utils.decorators import api_gateway_handler
from core.utils.request import get_path_image_id
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import GetImageRequest
from .service import GetService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Return the image named in the path.

    A missing or malformed id is a 400; an id that does not exist or
    belongs to another user is a 404.
    """
    request_id = getattr(context, "aws_request_id", None)
    user_id = get_authenticated_user_id(event)

    try:
        request = validate_request(GetImageRequest, {"image_id": get_path_image_id(event)})
    except ValidationError as exc:
        errors = sanitize_validation_errors(list(exc.errors()))
        logger.warning("Invalid image id in path", extra={"errors": errors})
        return ResponseBuilder.bad_request(
            "Invalid request params",
            details={"errors": errors},
            request_id=request_id,
        )

    record = GetService().get_image(request.image_id, user_id)

    return ResponseBuilder.ok(Image.from_record(record).model_dump())

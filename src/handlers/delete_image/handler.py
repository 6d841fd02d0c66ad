"""
DELETE /images/{id}: remove an image and its stored file.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from core.utils.auth import get_authenticated_user_id
from core.utils.decorators import api_gateway_handler
from core.utils.request import get_path_image_id
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors, validate_request

from .models import DeleteImageRequest
from .service import DeleteService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Delete the image named in the path; 204 on success.

    Errors:
        400: missing or malformed image id
        401: no authenticated user
        404: unknown image or another user's image
        500: record store failure
    """
    user_id = get_authenticated_user_id(event)

    try:
        request = validate_request(DeleteImageRequest, {"image_id": get_path_image_id(event)})
    except ValidationError as exc:
        errors = sanitize_validation_errors(list(exc.errors()))
        logger.warning("Invalid image id in path", extra={"errors": errors})
        return ResponseBuilder.bad_request(
            "Invalid request params",
            details={"errors": errors},
            request_id=getattr(context, "aws_request_id", None),
        )

    deleted = DeleteService().delete_image(request.image_id, user_id)
    logger.info("Image deleted", extra=deleted)

    return ResponseBuilder.no_content()

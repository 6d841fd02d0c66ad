"""
Error boundary shared by every gallery Lambda handler.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import ImageServiceError
from core.utils.response import ResponseBuilder
from core.utils.validators import sanitize_validation_errors

logger = Logger(service="api-gateway-handler", UTC=True)

JsonDict = dict[str, Any]

# Messages starting with these are written for clients and returned as-is
_CLIENT_SAFE_PREFIXES = (
    "Invalid",
    "Missing",
    "Required",
    "Must",
    "Cannot",
    "Unable to",
    "Image",
    "File",
    "Title",
)

# Checked in order, so subclasses come before their bases
_UNEXPECTED_ERRORS: tuple[tuple[tuple[type[BaseException], ...], HTTPStatus, str], ...] = (
    (
        (UnicodeDecodeError, UnicodeEncodeError),
        HTTPStatus.BAD_REQUEST,
        "The request contains invalid characters or encoding. Please check the file format.",
    ),
    (
        (ValueError,),
        HTTPStatus.BAD_REQUEST,
        "The provided data is invalid. Please check your input and try again.",
    ),
    (
        (KeyError, AttributeError),
        HTTPStatus.BAD_REQUEST,
        "A required field is missing. Please ensure all required fields are provided.",
    ),
    (
        (TypeError,),
        HTTPStatus.BAD_REQUEST,
        "The data format is incorrect. Please check the request format.",
    ),
    (
        (PermissionError,),
        HTTPStatus.FORBIDDEN,
        "You don't have permission to perform this action.",
    ),
    (
        (TimeoutError,),
        HTTPStatus.GATEWAY_TIMEOUT,
        "The request took too long to process. Please try again.",
    ),
    (
        (ConnectionError, OSError),
        HTTPStatus.SERVICE_UNAVAILABLE,
        "Unable to connect to required services. Please try again later.",
    ),
)


def _classify(exc: Exception) -> tuple[HTTPStatus, str]:
    for types, status, message in _UNEXPECTED_ERRORS:
        if isinstance(exc, types):
            text = str(exc)
            if status == HTTPStatus.BAD_REQUEST and text.startswith(_CLIENT_SAFE_PREFIXES):
                return status, text
            return status, message

    return (
        HTTPStatus.INTERNAL_SERVER_ERROR,
        "We're experiencing technical difficulties. Please try again in a few moments.",
    )


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Wrap an API Gateway handler so that it always returns a JSON response.

    - OPTIONS requests get the CORS preflight answer without running the handler
    - every other request is logged on arrival
    - gallery errors are mapped by `ResponseBuilder.from_service_error`
    - pydantic errors become 422 with sanitized field errors
    - anything else becomes a generic 4xx/5xx body; 5xx are logged with traceback

    Example:
        @api_gateway_handler
        def handler(event, context):
            ...
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.no_content(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)
        log_extra = {"handler": func.__module__, "request_id": request_id}

        logger.info(
            "Received request",
            extra={
                **log_extra,
                "http_method": event.get("httpMethod"),
                "path": event.get("path"),
                "function_name": getattr(context, "function_name", None),
            },
        )

        try:
            return func(event, context)

        except ImageServiceError as exc:
            logger.warning(
                "Request failed",
                extra={**log_extra, "error_code": exc.error_code, "error": exc.message},
            )
            return ResponseBuilder.from_service_error(
                exc,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except PydanticValidationError as exc:
            errors = sanitize_validation_errors(list(exc.errors()))
            logger.warning("Request validation failed", extra={**log_extra, "errors": errors})
            return ResponseBuilder.validation_error(
                message="Invalid request payload",
                details={"errors": errors},
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except Exception as exc:
            status, message = _classify(exc)
            extra = {**log_extra, "error": str(exc), "error_type": type(exc).__name__}

            if status >= HTTPStatus.INTERNAL_SERVER_ERROR:
                logger.exception("Unhandled error in handler", extra=extra)
            else:
                logger.warning("Rejected request in handler", extra=extra, exc_info=True)

            return ResponseBuilder.error(
                status=status,
                message=message,
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper

"""
API Gateway proxy responses for the gallery endpoints.

Every response is JSON (except 204) and carries the CORS headers the
gallery front end needs. Error bodies look like
`{error, message, timestamp, details?, request_id?}`.
"""

from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any

from core.models.errors import (
    AuthenticationError,
    ImageServiceError,
    NotFoundError,
    ValidationError,
)
from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
    ERROR_CODE_VALIDATION_FAILED,
    EXPOSE_HEADERS,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]


class ResponseBuilder:
    """Builds `{statusCode, headers, body}` dicts."""

    @staticmethod
    def headers(cors_origin: str | None = None) -> dict[str, str]:
        return {
            "Content-Type": DEFAULT_CONTENT_TYPE,
            "Access-Control-Allow-Origin": cors_origin or CORS_ORIGIN,
            "Access-Control-Allow-Headers": CORS_HEADERS,
            "Access-Control-Allow-Methods": CORS_METHODS,
            "Access-Control-Expose-Headers": EXPOSE_HEADERS,
        }

    @classmethod
    def build(
        cls,
        status: HTTPStatus,
        body: JsonDict,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload = dict(body)
        if request_id:
            payload["request_id"] = request_id

        return {
            "statusCode": status.value,
            "headers": cls.headers(cors_origin),
            "body": json.dumps(payload),
        }

    @classmethod
    def ok(cls, body: JsonDict, **kwargs: Any) -> JsonDict:
        return cls.build(HTTPStatus.OK, body, **kwargs)

    @classmethod
    def created(cls, body: JsonDict, **kwargs: Any) -> JsonDict:
        return cls.build(HTTPStatus.CREATED, body, **kwargs)

    @classmethod
    def no_content(cls, *, cors_origin: str | None = None) -> JsonDict:
        """204 with an empty body; also the answer to CORS preflight."""
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": cls.headers(cors_origin),
            "body": "",
        }

    @classmethod
    def error(
        cls,
        *,
        status: HTTPStatus,
        message: str,
        error: str | None = None,
        details: JsonDict | None = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        body: JsonDict = {
            "error": error or status.name,
            "message": message,
            "timestamp": utc_now_iso(),
        }
        if details:
            body["details"] = details

        return cls.build(status, body, request_id=request_id, cors_origin=cors_origin)

    @classmethod
    def bad_request(cls, message: str, **kwargs: Any) -> JsonDict:
        """400, used for bodies that cannot be read at all."""
        return cls.error(status=HTTPStatus.BAD_REQUEST, message=message, **kwargs)

    @classmethod
    def validation_error(
        cls,
        *,
        message: str,
        error: str = ERROR_CODE_VALIDATION_FAILED,
        **kwargs: Any,
    ) -> JsonDict:
        """422, for readable requests whose content is rejected."""
        return cls.error(
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            message=message,
            error=error,
            **kwargs,
        )

    @classmethod
    def unauthorized(cls, message: str = "Unauthorized", **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.UNAUTHORIZED, message=message, **kwargs)

    @classmethod
    def not_found(cls, message: str = "Resource not found", **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.NOT_FOUND, message=message, **kwargs)

    @classmethod
    def internal_error(cls, message: str = "Internal server error", **kwargs: Any) -> JsonDict:
        return cls.error(status=HTTPStatus.INTERNAL_SERVER_ERROR, message=message, **kwargs)

    @classmethod
    def from_service_error(
        cls,
        exc: ImageServiceError,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """Map a gallery error onto its HTTP response."""
        if isinstance(exc, ValidationError):
            return cls.validation_error(
                message=exc.message,
                error=exc.error_code,
                details=exc.details,
                request_id=request_id,
                cors_origin=cors_origin,
            )

        if isinstance(exc, NotFoundError):
            return cls.not_found(exc.message, request_id=request_id, cors_origin=cors_origin)

        if isinstance(exc, AuthenticationError):
            return cls.unauthorized(exc.message, request_id=request_id, cors_origin=cors_origin)

        return cls.internal_error(exc.message, request_id=request_id, cors_origin=cors_origin)

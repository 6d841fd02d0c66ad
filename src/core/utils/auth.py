"""Resolve the authenticated caller from an API Gateway event."""

from typing import Any

from core.models.errors import AuthenticationError


def get_authenticated_user_id(event: dict[str, Any]) -> str:
    """Return the user id placed on the request by the API Gateway authorizer.

    Lookup order:
    - Cognito user pool authorizer: `claims.sub`
    - Lambda REQUEST/TOKEN authorizer: `principalId`
    - HTTP API Lambda authorizer: `lambda.user_id`

    Raises:
        AuthenticationError: If no authorizer identity is present
    """
    request_context = event.get("requestContext") or {}
    authorizer = request_context.get("authorizer") or {}

    claims = authorizer.get("claims") or {}
    lambda_context = authorizer.get("lambda") or {}

    for candidate in (
        claims.get("sub"),
        authorizer.get("principalId"),
        lambda_context.get("user_id"),
    ):
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()

    raise AuthenticationError(message="Authentication required")

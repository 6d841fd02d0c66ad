import json
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest


@pytest.fixture
def lambda_context(monkeypatch):
    context = SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )

    monkeypatch.setattr(
        "aws_lambda_powertools.utilities.typing.LambdaContext",
        lambda: context,
        raising=False,
    )

    return context


def _authorizer(user_id: str | None) -> dict[str, Any]:
    if user_id is None:
        return {}
    return {"authorizer": {"claims": {"sub": user_id}}}


@pytest.fixture
def api_event() -> Callable[..., dict[str, Any]]:
    """
    Build an API Gateway proxy event.

    Usage:
        event = api_event("POST", "/images", body={"title": "x"}, user_id="john")
    """

    def _event(
        method: str = "GET",
        path: str = "/images",
        *,
        body: Any = None,
        image_id: str | None = None,
        user_id: str | None = "john",
        headers: dict[str, str] | None = None,
        is_base64: bool = False,
    ) -> dict[str, Any]:
        event_headers = {"Content-Type": "application/json"}
        if headers:
            event_headers.update(headers)

        if isinstance(body, dict):
            body = json.dumps(body)

        return {
            "httpMethod": method,
            "path": path,
            "headers": event_headers,
            "pathParameters": {"image_id": image_id} if image_id else None,
            "requestContext": _authorizer(user_id),
            "body": body,
            "isBase64Encoded": is_base64,
        }

    return _event


@pytest.fixture
def response_body() -> Callable[[dict[str, Any]], dict[str, Any]]:
    def _body(response: dict[str, Any]) -> dict[str, Any]:
        body: dict[str, Any] = json.loads(response["body"])
        return body

    return _body

"""Request model validation and client-safe error formatting."""

from typing import Any, TypeVar

from pydantic import BaseModel

ModelT = TypeVar("ModelT", bound=BaseModel)

# pydantic error type -> message shown to the client
_MESSAGES_BY_TYPE: dict[str, str] = {
    "missing": "This field is required",
    "string_type": "Invalid value type",
    "dict_type": "Invalid value type",
    "model_type": "Invalid value type",
    "string_too_short": "Must not be empty",
    "string_pattern_mismatch": "Contains unsupported characters",
}


def _message_for(err: dict[str, Any]) -> str:
    msg = str(err.get("msg", "Invalid value")).replace("Value error,", "").strip()

    if "base64" in msg.lower():
        return "File must be a valid Base64-encoded string"

    if err.get("type") == "string_too_long":
        max_length = (err.get("ctx") or {}).get("max_length")
        return f"Must be at most {max_length} characters" if max_length else msg

    if err.get("type") in _MESSAGES_BY_TYPE:
        return _MESSAGES_BY_TYPE[err["type"]]

    if msg.lower() == "field required":
        return _MESSAGES_BY_TYPE["missing"]

    return msg


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Reduce pydantic errors to `{field, message}` pairs.

    `input`, `ctx` and `url` are dropped so request content never leaks
    back into the response body.
    """
    return [
        {
            "field": ".".join(str(part) for part in err.get("loc", ())) or "body",
            "message": _message_for(err),
        }
        for err in errors
    ]


def validate_request(model: type[ModelT], data: dict[str, Any]) -> ModelT:
    """Build `model` from `data`; raises pydantic.ValidationError."""
    return model.model_validate(data)

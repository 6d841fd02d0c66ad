"""Helpers for reading API Gateway proxy events."""

import base64
import binascii
import json
from typing import Any

from core.utils.constants import MULTIPART_CONTENT_TYPE
from core.utils.multipart import parse_multipart_form


def get_header(event: dict[str, Any], name: str) -> str | None:
    """Case-insensitive header lookup on an API Gateway event."""
    headers = event.get("headers") or {}
    wanted = name.lower()

    for key, value in headers.items():
        if key.lower() == wanted:
            return value

    return None


def get_path_image_id(event: dict[str, Any]) -> str | None:
    path_params = event.get("pathParameters") or {}
    return path_params.get("image_id") or path_params.get("id")


def get_raw_body(event: dict[str, Any]) -> bytes:
    """Return the request body as bytes, undoing API Gateway's Base64 wrapping."""
    body = event.get("body") or ""

    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("Invalid request body encoding") from exc

    return body.encode("utf-8") if isinstance(body, str) else body


def parse_image_payload(event: dict[str, Any]) -> dict[str, Any]:
    """Read the image fields from a JSON or multipart/form-data body.

    Multipart file parts are returned as `UploadedFile` instances under
    their form field name; JSON bodies are returned as decoded.

    Raises:
        ValueError: If the body is not valid JSON / multipart
    """
    content_type = get_header(event, "Content-Type") or ""

    if content_type.lower().startswith(MULTIPART_CONTENT_TYPE):
        fields, files = parse_multipart_form(get_raw_body(event), content_type)
        payload: dict[str, Any] = dict(fields)
        payload.update(files)
        return payload

    raw = get_raw_body(event)
    if not raw.strip():
        return {}

    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ValueError("Invalid JSON body") from exc

    if not isinstance(body, dict):
        raise ValueError("Invalid JSON body: expected an object")

    return body

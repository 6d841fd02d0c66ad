"""
Parsing of multipart/form-data request bodies delivered by API Gateway.
"""

from email import policy
from email.parser import BytesParser

from core.models.upload import UploadedFile


def parse_multipart_form(
    body: bytes,
    content_type: str,
) -> tuple[dict[str, str], dict[str, UploadedFile]]:
    """Split a multipart/form-data body into text fields and files.

    Args:
        body: Raw request body
        content_type: Full Content-Type header, including the boundary

    Returns:
        Tuple of (fields, files) keyed by form field name

    Raises:
        ValueError: If the body is not a well-formed multipart payload
    """
    if "boundary=" not in content_type:
        raise ValueError("Missing multipart boundary")

    preamble = f"Content-Type: {content_type}\r\nMIME-Version: 1.0\r\n\r\n".encode("latin-1")
    message = BytesParser(policy=policy.HTTP).parsebytes(preamble + body)

    if not message.is_multipart():
        raise ValueError("Invalid multipart body")

    fields: dict[str, str] = {}
    files: dict[str, UploadedFile] = {}

    for part in message.iter_parts():
        name = part.get_param("name", header="content-disposition")
        if not name:
            continue

        payload = part.get_payload(decode=True) or b""
        file_name = part.get_filename()

        if file_name is None:
            charset = part.get_content_charset() or "utf-8"
            fields[str(name)] = payload.decode(charset)
            continue

        files[str(name)] = UploadedFile(
            file_name=file_name,
            content_type=part.get_content_type() if part.get("Content-Type") else None,
            data=payload,
        )

    return fields, files

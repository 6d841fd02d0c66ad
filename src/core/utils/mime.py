"""Image type helpers: extension/MIME mapping and magic-byte sniffing."""

from collections.abc import Mapping

from core.utils.constants import EXTENSION_MIME_TYPE_MAP, MIME_TYPE_EXTENSION_MAP

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
}


def normalize_extension(extension: str) -> str:
    """Lower-case, drop the dot and spell `jpeg` as `jpg`."""
    extension = extension.lower().lstrip(".")
    return "jpg" if extension == "jpeg" else extension


def extension_for(mime_type: str) -> str:
    return MIME_TYPE_EXTENSION_MAP[mime_type][0]


def mime_type_for(extension: str) -> str:
    return EXTENSION_MIME_TYPE_MAP[extension.lower()]


def detect_mime_type(file_data: bytes) -> str:
    """Guess an image type from the leading bytes.

    Raises:
        ValueError: If the bytes match no supported image format
    """
    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    raise ValueError("Unsupported or unknown file type")

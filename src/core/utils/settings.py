"""Upload configuration loaded from the environment."""

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.utils.constants import (
    DEFAULT_ALLOWED_EXTENSIONS,
    DEFAULT_MAX_SIZE_KB,
    ENV_IMAGE_ALLOWED_EXTENSIONS,
    ENV_IMAGE_MAX_SIZE_KB,
    ENV_IMAGE_PUBLIC_URL_PREFIX,
    EXTENSION_MIME_TYPE_MAP,
)
from core.utils.mime import normalize_extension


class UploadSettings(BaseModel):
    """Limits and URL convention applied to every stored image.

    `max_size_kb` and `allowed_extensions` mirror the `maxSizeKB` and
    `allowedExtensions` options of the upload form.
    """

    model_config = ConfigDict(frozen=True)

    max_size_kb: int = Field(default=DEFAULT_MAX_SIZE_KB, ge=1)
    allowed_extensions: frozenset[str] = Field(default=DEFAULT_ALLOWED_EXTENSIONS)
    public_url_prefix: str | None = Field(
        default=None,
        description="Base URL prepended to storage keys; derived from the bucket when unset",
    )

    @field_validator("allowed_extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, value: object) -> frozenset[str]:
        if isinstance(value, str):
            value = value.split(",")

        if not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError("allowed_extensions must be a list of extensions")

        extensions = frozenset(str(ext).strip().lower().lstrip(".") for ext in value if str(ext).strip())

        if not extensions:
            raise ValueError("allowed_extensions must not be empty")

        unknown = extensions - EXTENSION_MIME_TYPE_MAP.keys()
        if unknown:
            raise ValueError(f"Unsupported image extensions: {', '.join(sorted(unknown))}")

        return extensions

    @field_validator("public_url_prefix")
    @classmethod
    def strip_trailing_slash(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip().rstrip("/")

    @property
    def max_size_bytes(self) -> int:
        return self.max_size_kb * 1024

    @property
    def accepted_extensions(self) -> frozenset[str]:
        """Allowed extensions with `jpeg` spelled `jpg`, so either spelling admits both."""
        return frozenset(normalize_extension(ext) for ext in self.allowed_extensions)

    @property
    def allowed_mime_types(self) -> frozenset[str]:
        return frozenset(EXTENSION_MIME_TYPE_MAP[ext] for ext in self.allowed_extensions)

    @classmethod
    def from_env(cls) -> "UploadSettings":
        """Build settings from environment variables, falling back to defaults."""
        values: dict[str, object] = {}

        max_size = os.getenv(ENV_IMAGE_MAX_SIZE_KB)
        if max_size:
            try:
                values["max_size_kb"] = int(max_size)
            except ValueError as exc:
                raise RuntimeError(f"{ENV_IMAGE_MAX_SIZE_KB} must be an integer, got '{max_size}'") from exc

        extensions = os.getenv(ENV_IMAGE_ALLOWED_EXTENSIONS)
        if extensions:
            values["allowed_extensions"] = extensions

        prefix = os.getenv(ENV_IMAGE_PUBLIC_URL_PREFIX)
        if prefix:
            values["public_url_prefix"] = prefix

        try:
            return cls(**values)
        except ValueError as exc:
            # pydantic.ValidationError is a ValueError
            raise RuntimeError(f"Invalid upload configuration: {exc}") from exc

"""
Client-side gallery state: the image list plus a single add/edit form.

Every action talks to the API through `GalleryApiClient`. Failed requests
are logged and leave the local state as it was.
"""

import base64
import mimetypes
from collections.abc import Callable
from pathlib import Path
from typing import Any

import requests
from aws_lambda_powertools import Logger
from pydantic import BaseModel

from gallery_client.api_client import GalleryApiClient

logger = Logger(service="gallery-client")

Record = dict[str, Any]


class GalleryForm(BaseModel):
    """Values of the add/edit form."""

    title: str = ""
    src: str = ""


class GalleryView:
    """Holds the list of images and the form state of the gallery page."""

    def __init__(self, client: GalleryApiClient) -> None:
        self.client = client
        self.images: list[Record] = []
        self.form = GalleryForm()
        self.editing_id: str | None = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def mount(self) -> bool:
        """Load the full image list."""
        return self._refresh()

    def set_title(self, title: str) -> None:
        self.form.title = title

    def set_source(self, src: str) -> None:
        self.form.src = src

    def stage_file(self, path: str | Path) -> None:
        """Read a local image into the form as a Base64 data URI."""
        path = Path(path)
        mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        payload = base64.b64encode(path.read_bytes()).decode("ascii")

        self.form.src = f"data:{mime_type};base64,{payload}"

    def add_image(self) -> bool:
        try:
            self.client.create_image(self.form.title, self.form.src)
        except requests.RequestException:
            logger.exception("Failed to add image", extra={"title": self.form.title})
            return False

        self._reset_form()
        self._refresh()
        return True

    def start_edit(self, image_id: str) -> bool:
        """Fill the form from a listed image and switch to edit mode."""
        image = self._find(image_id)

        if image is None:
            logger.warning("Cannot edit unknown image", extra={"image_id": image_id})
            return False

        self.form = GalleryForm(title=image.get("title") or "", src=image.get("file_url") or "")
        self.editing_id = image_id
        return True

    def cancel_edit(self) -> None:
        self._reset_form()

    def update_image(self) -> bool:
        """Send the changed form fields for the image being edited."""
        if self.editing_id is None:
            logger.warning("No image is being edited")
            return False

        image = self._find(self.editing_id) or {}

        title = self.form.title if self.form.title != image.get("title") else None
        src = self.form.src if self.form.src != image.get("file_url") else None

        try:
            self.client.update_image(self.editing_id, title=title, src=src)
        except requests.RequestException:
            logger.exception("Failed to update image", extra={"image_id": self.editing_id})
            return False

        self._reset_form()
        self._refresh()
        return True

    def delete_image(
        self,
        image_id: str,
        confirm: Callable[[Record | None], bool] | None = None,
    ) -> bool:
        """Delete an image; `confirm` may veto the request."""
        if confirm is not None and not confirm(self._find(image_id)):
            return False

        try:
            self.client.delete_image(image_id)
        except requests.RequestException:
            logger.exception("Failed to delete image", extra={"image_id": image_id})
            return False

        self.images = [image for image in self.images if image.get("id") != image_id]

        if self.editing_id == image_id:
            self._reset_form()

        return True

    def _find(self, image_id: str) -> Record | None:
        return next((image for image in self.images if image.get("id") == image_id), None)

    def _reset_form(self) -> None:
        self.form = GalleryForm()
        self.editing_id = None

    def _refresh(self) -> bool:
        try:
            self.images = self.client.list_images()
        except requests.RequestException:
            logger.exception("Failed to load images")
            return False
        return True

"""
HTTP client for the Image Gallery API.
"""

import mimetypes
from pathlib import Path
from typing import Any, cast

import requests

DEFAULT_TIMEOUT = 30


class GalleryApiClient:
    """Thin wrapper over the `/images` endpoints.

    Every call raises `requests.HTTPError` on a non-2xx response.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        headers: dict[str, str] | None = None,
        timeout: int = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

        self.headers: dict[str, str] = {"Accept": "application/json"}
        if token:
            self.headers["Authorization"] = f"Bearer {token}"
        if headers:
            self.headers.update(headers)

    def _url(self, image_id: str | None = None) -> str:
        if image_id is None:
            return f"{self.base_url}/images"
        return f"{self.base_url}/images/{image_id}"

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        response = self.session.request(
            method,
            url,
            headers=self.headers,
            timeout=self.timeout,
            **kwargs,
        )
        response.raise_for_status()
        return response

    def list_images(self) -> list[dict[str, Any]]:
        body = cast(dict[str, Any], self._request("GET", self._url()).json())
        return cast(list[dict[str, Any]], body.get("images", []))

    def get_image(self, image_id: str) -> dict[str, Any]:
        return cast(dict[str, Any], self._request("GET", self._url(image_id)).json())

    def create_image(self, title: str, src: str) -> dict[str, Any]:
        """Create an image from a data URI or plain URL."""
        response = self._request("POST", self._url(), json={"title": title, "src": src})
        return cast(dict[str, Any], response.json())

    def upload_file(self, title: str, path: str | Path) -> dict[str, Any]:
        """Create an image from a local file as multipart/form-data."""
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"

        with open(path, "rb") as f:
            response = self._request(
                "POST",
                self._url(),
                data={"title": title},
                files={"file": (path.name, f, content_type)},
            )

        return cast(dict[str, Any], response.json())

    def update_image(
        self,
        image_id: str,
        *,
        title: str | None = None,
        src: str | None = None,
    ) -> dict[str, Any]:
        """Send only the fields that are set."""
        payload: dict[str, Any] = {}
        if title is not None:
            payload["title"] = title
        if src is not None:
            payload["src"] = src

        response = self._request("PUT", self._url(image_id), json=payload)
        return cast(dict[str, Any], response.json())

    def delete_image(self, image_id: str) -> None:
        self._request("DELETE", self._url(image_id))

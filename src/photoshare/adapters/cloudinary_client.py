"""Cloudinary media host client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from photoshare.domain.errors import UploadError
from photoshare.domain.uploads import UploadedMedia

logger = logging.getLogger(__name__)

_UPLOAD_SEGMENT = "/upload/"


class MediaHostClient(Protocol):
    """Interface for media host interactions."""

    async def upload(
        self, content: bytes, filename: str, content_type: str
    ) -> UploadedMedia:
        """Store an image and return its public location."""

    async def delete(self, media_id: str) -> bool:
        """Destroy an asset, returning True only when the host confirms it."""


@dataclass(frozen=True)
class DisplayOptions:
    """Resize and quality directives for a delivery URL."""

    width: int | str = "auto"
    height: int | str = "auto"
    quality: int | str = "auto"
    format: str = "auto"


THUMBNAIL_OPTIONS = DisplayOptions(width=400, height=300)
VIEWER_OPTIONS = DisplayOptions(width=1200, height=800)


def build_display_url(base_url: str, options: DisplayOptions | None = None) -> str:
    """Insert transformation directives after the first ``/upload/`` segment.

    URLs without the segment are returned unchanged.
    """
    resolved = options or DisplayOptions()
    directives = (
        f"w_{resolved.width},h_{resolved.height},c_fill,"
        f"q_{resolved.quality},f_{resolved.format}"
    )
    return base_url.replace(_UPLOAD_SEGMENT, f"{_UPLOAD_SEGMENT}{directives}/", 1)


@dataclass
class HttpxCloudinaryClient(MediaHostClient):
    """HTTPX-backed Cloudinary client using unsigned preset uploads."""

    cloud_name: str
    api_key: str
    upload_preset: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, cloud_name: str, api_key: str, upload_preset: str, base_url: str
    ) -> "HttpxCloudinaryClient":
        """Create a Cloudinary client with a managed httpx session."""
        return cls(
            cloud_name=cloud_name,
            api_key=api_key,
            upload_preset=upload_preset,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def upload(
        self, content: bytes, filename: str, content_type: str
    ) -> UploadedMedia:
        """Upload raw file content with the configured preset."""
        url = f"{self.base_url}/{self.cloud_name}/image/upload"
        try:
            response = await self.http_client.post(
                url,
                data={"upload_preset": self.upload_preset},
                files={"file": (filename, content, content_type)},
            )
            response.raise_for_status()
            payload = response.json()
            return UploadedMedia(
                url=payload["secure_url"],
                media_id=payload["public_id"],
                width=payload.get("width"),
                height=payload.get("height"),
            )
        except (httpx.HTTPError, ValueError, KeyError) as exc:
            raise UploadError(f"Upload of {filename} failed") from exc

    async def delete(self, media_id: str) -> bool:
        """Request destruction of a hosted asset."""
        url = f"{self.base_url}/{self.cloud_name}/image/destroy"
        try:
            response = await self.http_client.post(
                url,
                json={"public_id": media_id, "api_key": self.api_key},
            )
            payload = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Cloudinary delete failed", extra={"media_id": media_id})
            return False
        return isinstance(payload, dict) and payload.get("result") == "ok"

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

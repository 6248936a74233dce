"""Gallery and admin operations over stored photos."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from photoshare.adapters.cloudinary_client import MediaHostClient
from photoshare.domain.errors import ValidationError
from photoshare.domain.photos import NewPhoto, Photo, PhotoUpdate

logger = logging.getLogger(__name__)


class PhotoRepository(Protocol):
    """Persistence interface for photo records."""

    def list_photos(self) -> list[Photo]:
        """Return all photos ordered by creation time, newest first."""

    def insert_photo(self, photo: NewPhoto) -> Photo:
        """Create a photo record and return it."""

    def update_photo(self, photo_id: UUID, update: PhotoUpdate) -> Photo:
        """Replace title and description of a photo and return it."""

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo record."""

    def get_photo(self, photo_id: UUID) -> Photo:
        """Return a single photo by id."""


@dataclass
class PhotoService:
    """Application service for browsing and administering photos."""

    repository: PhotoRepository
    media_client: MediaHostClient

    def list_photos(self) -> list[Photo]:
        """Return the gallery listing."""
        return self.repository.list_photos()

    def get_photo(self, photo_id: UUID) -> Photo:
        """Return a photo by id."""
        return self.repository.get_photo(photo_id)

    def update_photo(
        self, photo_id: UUID, title: str, description: str | None
    ) -> Photo:
        """Replace a photo's title and description."""
        cleaned_title = title.strip()
        if not cleaned_title:
            raise ValidationError("Title is required")
        cleaned_description = (description or "").strip()
        return self.repository.update_photo(
            photo_id,
            PhotoUpdate(title=cleaned_title, description=cleaned_description),
        )

    async def delete_photo(self, photo_id: UUID) -> bool:
        """Delete hosted media, then the record.

        The two steps are not atomic. A record delete failure propagates and
        leaves the record listed with dangling media. Returns whether the
        media host confirmed its deletion.
        """
        photo = self.repository.get_photo(photo_id)
        media_deleted = await self.media_client.delete(photo.media_id)
        if not media_deleted:
            logger.warning(
                "Media deletion unconfirmed",
                extra={"photo_id": str(photo.id), "media_id": photo.media_id},
            )
        self.repository.delete_photo(photo.id)
        logger.info("Deleted photo", extra={"photo_id": str(photo.id)})
        return media_deleted

    def summary(self) -> dict[str, int]:
        """Return admin panel counters."""
        return summarize(self.repository.list_photos())


def summarize(photos: list[Photo]) -> dict[str, int]:
    """Count all photos and those carrying a description."""
    return {
        "total_photos": len(photos),
        "described_photos": sum(1 for photo in photos if photo.description),
    }


@dataclass(frozen=True)
class PhotoNavigator:
    """Previous/next lookup over a loaded listing, without wraparound."""

    photos: list[Photo]

    def index_of(self, photo_id: UUID) -> int | None:
        for index, photo in enumerate(self.photos):
            if photo.id == photo_id:
                return index
        return None

    def has_next(self, photo_id: UUID) -> bool:
        index = self.index_of(photo_id)
        return index is not None and index < len(self.photos) - 1

    def has_previous(self, photo_id: UUID) -> bool:
        index = self.index_of(photo_id)
        return index is not None and index > 0

    def next(self, photo_id: UUID) -> Photo | None:
        """Return the photo after the given one, if any."""
        if not self.has_next(photo_id):
            return None
        return self.photos[self.index_of(photo_id) + 1]

    def previous(self, photo_id: UUID) -> Photo | None:
        """Return the photo before the given one, if any."""
        if not self.has_previous(photo_id):
            return None
        return self.photos[self.index_of(photo_id) - 1]

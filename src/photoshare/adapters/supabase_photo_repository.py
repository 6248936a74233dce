"""Supabase-backed photo repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from postgrest import APIError
from supabase import Client

from photoshare.domain.errors import NotFoundError, StoreError
from photoshare.domain.photos import NewPhoto, Photo, PhotoUpdate
from photoshare.services.photos import PhotoRepository

_TABLE = "photos"


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo records."""

    client: Client

    def list_photos(self) -> list[Photo]:
        """Return all photos, newest first."""
        try:
            response = (
                self.client.table(_TABLE)
                .select("*")
                .order("created_at", desc=True)
                .execute()
            )
        except APIError as exc:
            raise StoreError("Failed to load photos") from exc
        return [_parse_photo(row) for row in response.data or []]

    def insert_photo(self, photo: NewPhoto) -> Photo:
        """Create a photo row and return the stored record."""
        try:
            response = (
                self.client.table(_TABLE)
                .insert(
                    {
                        "title": photo.title,
                        "description": photo.description or None,
                        "media_url": photo.media_url,
                        "media_id": photo.media_id,
                    }
                )
                .execute()
            )
        except APIError as exc:
            raise StoreError("Failed to save photo") from exc
        if not response.data:
            raise StoreError("Failed to save photo")
        return _parse_photo(response.data[0])

    def update_photo(self, photo_id: UUID, update: PhotoUpdate) -> Photo:
        """Replace title and description of a photo."""
        try:
            response = (
                self.client.table(_TABLE)
                .update({"title": update.title, "description": update.description})
                .eq("id", str(photo_id))
                .execute()
            )
        except APIError as exc:
            raise StoreError("Failed to update photo") from exc
        if not response.data:
            raise NotFoundError(f"Photo {photo_id} not found")
        return _parse_photo(response.data[0])

    def delete_photo(self, photo_id: UUID) -> None:
        """Delete a photo row."""
        try:
            self.client.table(_TABLE).delete().eq("id", str(photo_id)).execute()
        except APIError as exc:
            raise StoreError("Failed to delete photo") from exc

    def get_photo(self, photo_id: UUID) -> Photo:
        """Return exactly one photo by id."""
        try:
            response = (
                self.client.table(_TABLE).select("*").eq("id", str(photo_id)).execute()
            )
        except APIError as exc:
            raise StoreError("Failed to load photo") from exc
        rows = response.data or []
        if not rows:
            raise NotFoundError(f"Photo {photo_id} not found")
        if len(rows) > 1:
            raise StoreError(f"Multiple photos match {photo_id}")
        return _parse_photo(rows[0])


def _parse_photo(row: dict[str, object]) -> Photo:
    """Parse a photos row into a domain model."""
    return Photo(
        id=UUID(str(row["id"])),
        title=str(row.get("title", "")),
        description=row.get("description") or None,
        media_url=str(row["media_url"]),
        media_id=str(row["media_id"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )

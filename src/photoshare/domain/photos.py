"""Domain models for gallery photos."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Photo:
    """Represents a photo record stored in the data store."""

    id: UUID
    title: str
    description: str | None
    media_url: str
    media_id: str
    created_at: datetime


@dataclass(frozen=True)
class NewPhoto:
    """Insert payload for a freshly uploaded photo."""

    title: str
    media_url: str
    media_id: str
    description: str | None = None


@dataclass(frozen=True)
class PhotoUpdate:
    """Full replacement of the editable photo fields."""

    title: str
    description: str | None

"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from photoshare.adapters.cloudinary_client import MediaHostClient
from photoshare.api.app import create_app
from photoshare.config import Settings
from photoshare.containers import AppContainer
from photoshare.domain.errors import NotFoundError, StoreError, UploadError
from photoshare.domain.photos import NewPhoto, Photo, PhotoUpdate
from photoshare.domain.uploads import UploadedMedia
from photoshare.services.auth import Credentials
from photoshare.services.client_storage import ClientStorageRegistry
from photoshare.services.photos import PhotoRepository, PhotoService
from photoshare.services.uploads import UploadService

_EPOCH = datetime(2024, 1, 1, tzinfo=UTC)


@dataclass
class InMemoryPhotoRepository(PhotoRepository):
    """In-memory photo repository for tests."""

    photos: dict[UUID, Photo] = field(default_factory=dict)
    fail_insert: bool = False
    fail_delete: bool = False
    inserted: int = 0

    def list_photos(self) -> list[Photo]:
        return sorted(
            self.photos.values(), key=lambda photo: photo.created_at, reverse=True
        )

    def insert_photo(self, photo: NewPhoto) -> Photo:
        if self.fail_insert:
            raise StoreError("Failed to save photo")
        self.inserted += 1
        stored = Photo(
            id=uuid4(),
            title=photo.title,
            description=photo.description,
            media_url=photo.media_url,
            media_id=photo.media_id,
            created_at=_EPOCH + timedelta(seconds=self.inserted),
        )
        self.photos[stored.id] = stored
        return stored

    def update_photo(self, photo_id: UUID, update: PhotoUpdate) -> Photo:
        current = self.photos.get(photo_id)
        if current is None:
            raise NotFoundError(f"Photo {photo_id} not found")
        updated = Photo(
            id=current.id,
            title=update.title,
            description=update.description,
            media_url=current.media_url,
            media_id=current.media_id,
            created_at=current.created_at,
        )
        self.photos[photo_id] = updated
        return updated

    def delete_photo(self, photo_id: UUID) -> None:
        if self.fail_delete:
            raise StoreError("Failed to delete photo")
        self.photos.pop(photo_id, None)

    def get_photo(self, photo_id: UUID) -> Photo:
        photo = self.photos.get(photo_id)
        if photo is None:
            raise NotFoundError(f"Photo {photo_id} not found")
        return photo


@dataclass
class FakeMediaHostClient(MediaHostClient):
    """Fake media host that records calls and fails on request."""

    failing_filenames: set[str] = field(default_factory=set)
    uploads: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    confirm_delete: bool = True

    async def upload(
        self, content: bytes, filename: str, content_type: str
    ) -> UploadedMedia:
        self.uploads.append(filename)
        if filename in self.failing_filenames:
            raise UploadError(f"Upload of {filename} failed")
        media_id = f"gallery/{len(self.uploads)}"
        return UploadedMedia(
            url=f"https://res.cloudinary.com/demo/image/upload/v1/{media_id}.jpg",
            media_id=media_id,
            width=800,
            height=600,
        )

    async def delete(self, media_id: str) -> bool:
        self.deleted.append(media_id)
        return self.confirm_delete


def add_photo(
    repository: InMemoryPhotoRepository,
    title: str,
    description: str | None = None,
) -> Photo:
    """Store a photo directly in the repository."""
    return repository.insert_photo(
        NewPhoto(
            title=title,
            description=description,
            media_url=f"https://res.cloudinary.com/demo/image/upload/v1/{title}.jpg",
            media_id=f"gallery/{title}",
        )
    )


def make_client(container: AppContainer) -> TestClient:
    """Return a test client; the client cookie is only sent over https."""
    return TestClient(create_app(container), base_url="https://testserver")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        app_password="family-photos",
        admin_password="admin-secret",
        cloudinary_cloud_name="demo",
        cloudinary_api_key="cloudinary-key",
        cloudinary_upload_preset="unsigned-preset",
        supabase_url="https://example.supabase.co",
        supabase_key="anon-key",
        environment="test",
    )


@pytest.fixture
def photo_repository() -> InMemoryPhotoRepository:
    return InMemoryPhotoRepository()


@pytest.fixture
def media_client() -> FakeMediaHostClient:
    return FakeMediaHostClient()


@pytest.fixture
def container(
    settings: Settings,
    photo_repository: InMemoryPhotoRepository,
    media_client: FakeMediaHostClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        credentials=Credentials(
            admin_password=settings.admin_password,
            user_password=settings.app_password,
        ),
        media_client=media_client,
        photo_service=PhotoService(
            repository=photo_repository, media_client=media_client
        ),
        upload_service=UploadService(
            media_client=media_client, repository=photo_repository
        ),
        client_storage=ClientStorageRegistry(),
        close_resources=close_resources,
    )

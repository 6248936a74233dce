"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from photoshare.adapters.cloudinary_client import HttpxCloudinaryClient, MediaHostClient
from photoshare.adapters.supabase_photo_repository import SupabasePhotoRepository
from photoshare.config import Settings
from photoshare.services.auth import Credentials
from photoshare.services.client_storage import ClientStorageRegistry
from photoshare.services.photos import PhotoService
from photoshare.services.uploads import UploadService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    credentials: Credentials
    media_client: MediaHostClient
    photo_service: PhotoService
    upload_service: UploadService
    client_storage: ClientStorageRegistry
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )
    photo_repository = SupabasePhotoRepository(supabase_client)
    media_client = HttpxCloudinaryClient.create(
        cloud_name=resolved_settings.cloudinary_cloud_name,
        api_key=resolved_settings.cloudinary_api_key,
        upload_preset=resolved_settings.cloudinary_upload_preset,
        base_url=resolved_settings.cloudinary_base_url,
    )
    photo_service = PhotoService(
        repository=photo_repository, media_client=media_client
    )
    upload_service = UploadService(
        media_client=media_client, repository=photo_repository
    )

    async def close_resources() -> None:
        await media_client.close()

    return AppContainer(
        settings=resolved_settings,
        credentials=Credentials(
            admin_password=resolved_settings.admin_password,
            user_password=resolved_settings.app_password,
        ),
        media_client=media_client,
        photo_service=photo_service,
        upload_service=upload_service,
        client_storage=ClientStorageRegistry(
            max_clients=resolved_settings.client_storage_limit
        ),
        close_resources=close_resources,
    )

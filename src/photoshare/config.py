"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_password: str
    admin_password: str
    cloudinary_cloud_name: str
    cloudinary_api_key: str
    cloudinary_upload_preset: str
    cloudinary_base_url: str = "https://api.cloudinary.com/v1_1"
    supabase_url: str
    supabase_key: str
    client_cookie_name: str = "photoshare_client"
    client_storage_limit: int = 10_000
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

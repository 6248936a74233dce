"""Tests for container wiring."""

import asyncio

from photoshare.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.photo_service is not None
    assert container.upload_service.media_client is container.media_client
    assert container.credentials.user_password == "family-photos"
    asyncio.run(container.close_resources())

"""ASGI entrypoint for the PhotoShare app."""

from photoshare.api.app import create_app
from photoshare.containers import build_container

app = create_app(build_container())

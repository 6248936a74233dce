"""Request-scoped session and theme helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, status

from photoshare.services.auth import SessionState
from photoshare.services.theme import ThemeState

if TYPE_CHECKING:
    from photoshare.containers import AppContainer
    from photoshare.services.client_storage import ClientStorage

COLOR_SCHEME_HINT = "Sec-CH-Prefers-Color-Scheme"


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def get_client_storage(request: Request) -> ClientStorage:
    """Return the storage of the browser identified by the client cookie."""
    container = get_container(request)
    return container.client_storage.get(request.state.client_id)


def get_session(request: Request) -> SessionState:
    container = get_container(request)
    return SessionState(
        storage=get_client_storage(request), credentials=container.credentials
    )


def get_theme(request: Request) -> ThemeState:
    """Return the browser's theme state with root classes applied.

    Nothing is persisted here, so the OS preference keeps applying until
    the browser picks a theme explicitly.
    """
    prefers_dark = request.headers.get(COLOR_SCHEME_HINT, "").strip('"') == "dark"
    theme = ThemeState(storage=get_client_storage(request), prefers_dark=prefers_dark)
    theme.apply_theme()
    return theme


def require_session(request: Request) -> SessionState:
    """Ensure the browser has signed in."""
    session = get_session(request)
    if not session.is_authenticated():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    return session


def require_admin(request: Request) -> SessionState:
    """Ensure the browser has signed in with the admin secret."""
    session = require_session(request)
    if not session.is_admin():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
    return session


def format_error(container: AppContainer, exc: Exception) -> str:
    """Return a user-facing failure message with local debug info."""
    message = f"{exc}. Please try again."
    cause = exc.__cause__
    if container.settings.environment == "local" and cause is not None:
        return f"{message} (debug: {type(cause).__name__}: {cause})"
    return message

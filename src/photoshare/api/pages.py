"""Server-rendered login, gallery and viewer pages."""

from __future__ import annotations

import logging
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response

from photoshare.api.dependencies import (
    format_error,
    get_container,
    get_session,
    get_theme,
)
from photoshare.api.views import render_gallery, render_login, render_viewer
from photoshare.domain.errors import StoreError
from photoshare.services.photos import PhotoNavigator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


def _redirect(location: str) -> RedirectResponse:
    return RedirectResponse(location, status_code=status.HTTP_303_SEE_OTHER)


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request) -> Response:
    """Show the password form unless already signed in."""
    if get_session(request).is_authenticated():
        return _redirect("/")
    return HTMLResponse(render_login(get_theme(request)))


@router.post("/login")
async def login(request: Request, password: str = Form("")) -> Response:
    """Check the submitted password and start a session."""
    result = get_session(request).authenticate(password)
    if result.success:
        return _redirect("/")
    return HTMLResponse(
        render_login(get_theme(request), error="Incorrect password"),
        status_code=status.HTTP_401_UNAUTHORIZED,
    )


@router.post("/logout")
async def logout(request: Request) -> Response:
    get_session(request).logout()
    return _redirect("/login")


@router.post("/theme")
async def toggle_theme_page(request: Request) -> Response:
    get_theme(request).toggle_theme()
    return _redirect("/")


@router.get("/", response_class=HTMLResponse)
async def gallery(request: Request) -> Response:
    """Render the gallery grid for signed-in browsers."""
    session = get_session(request)
    if not session.is_authenticated():
        return _redirect("/login")
    container = get_container(request)
    theme = get_theme(request)
    try:
        photos = container.photo_service.list_photos()
    except StoreError as exc:
        logger.exception("Failed to load photos")
        return HTMLResponse(
            render_gallery(
                [], theme, session.is_admin(), error=format_error(container, exc)
            ),
            status_code=status.HTTP_502_BAD_GATEWAY,
        )
    return HTMLResponse(render_gallery(photos, theme, session.is_admin()))


@router.get("/photos/{photo_id}", response_class=HTMLResponse)
async def photo_viewer(photo_id: UUID, request: Request) -> Response:
    """Render one photo at full size with previous/next links."""
    if not get_session(request).is_authenticated():
        return _redirect("/login")
    container = get_container(request)
    photo = container.photo_service.get_photo(photo_id)
    navigator = PhotoNavigator(container.photo_service.list_photos())
    return HTMLResponse(
        render_viewer(
            photo,
            get_theme(request),
            previous=navigator.previous(photo.id),
            following=navigator.next(photo.id),
        )
    )

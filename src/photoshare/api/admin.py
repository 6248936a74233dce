"""Admin panel and endpoints for editing and deleting photos."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from pydantic import BaseModel

from photoshare.api.dependencies import get_session, get_theme, require_admin
from photoshare.api.views import render_admin
from photoshare.services.photos import summarize

if TYPE_CHECKING:
    from photoshare.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


class PhotoEditRequest(BaseModel):
    """Full replacement of a photo's editable fields."""

    title: str
    description: str | None


@router.get("", response_class=HTMLResponse)
async def admin_panel(request: Request) -> Response:
    """Admin UI listing every photo with edit and delete actions."""
    session = get_session(request)
    if not session.is_authenticated():
        return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)
    if not session.is_admin():
        return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    container: AppContainer = request.app.state.container
    photos = container.photo_service.list_photos()
    return HTMLResponse(render_admin(photos, get_theme(request), summarize(photos)))


@router.get("/summary", dependencies=[Depends(require_admin)])
async def admin_summary(request: Request) -> dict[str, int]:
    """Return photo counters for the admin panel."""
    container: AppContainer = request.app.state.container
    return container.photo_service.summary()


@router.put("/photos/{photo_id}", dependencies=[Depends(require_admin)])
async def edit_photo(
    photo_id: UUID, payload: PhotoEditRequest, request: Request
) -> dict[str, object]:
    """Replace a photo's title and description."""
    container: AppContainer = request.app.state.container
    photo = container.photo_service.update_photo(
        photo_id, payload.title, payload.description
    )
    return {
        "id": str(photo.id),
        "title": photo.title,
        "description": photo.description,
    }


@router.delete("/photos/{photo_id}", dependencies=[Depends(require_admin)])
async def delete_photo(photo_id: UUID, request: Request) -> dict[str, object]:
    """Delete hosted media and then the photo record."""
    container: AppContainer = request.app.state.container
    media_deleted = await container.photo_service.delete_photo(photo_id)
    return {"deleted": True, "media_deleted": media_deleted}

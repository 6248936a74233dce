"""JSON endpoints for sessions, themes and photos."""

from __future__ import annotations

from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from photoshare.adapters.cloudinary_client import (
    THUMBNAIL_OPTIONS,
    VIEWER_OPTIONS,
    build_display_url,
)
from photoshare.api.dependencies import (
    get_container,
    get_session,
    get_theme,
    require_session,
)
from photoshare.domain.photos import Photo  # noqa: TC001
from photoshare.domain.session import Theme  # noqa: TC001
from photoshare.domain.uploads import BatchUploadSummary, SelectedFile
from photoshare.services.photos import PhotoNavigator

router = APIRouter(prefix="/api", tags=["api"])


class LoginRequest(BaseModel):
    """Password submitted by an API client."""

    password: str


class ThemeRequest(BaseModel):
    """Explicit theme choice."""

    theme: Theme


@router.get("/session")
async def session_status(request: Request) -> dict[str, object]:
    """Return the browser's role and theme."""
    session = get_session(request)
    return {
        "authenticated": session.is_authenticated(),
        "admin": session.is_admin(),
        "role": session.role.value,
        "theme": get_theme(request).get_theme().value,
    }


@router.post("/session")
async def api_login(payload: LoginRequest, request: Request) -> JSONResponse:
    result = get_session(request).authenticate(payload.password)
    return JSONResponse(
        status_code=(
            status.HTTP_200_OK if result.success else status.HTTP_401_UNAUTHORIZED
        ),
        content={
            "success": result.success,
            "role": result.role.value if result.role else None,
        },
    )


@router.delete("/session")
async def api_logout(request: Request) -> dict[str, str]:
    get_session(request).logout()
    return {"status": "ok"}


@router.put("/theme")
async def set_theme(payload: ThemeRequest, request: Request) -> dict[str, str]:
    get_theme(request).set_theme(payload.theme)
    return {"theme": payload.theme.value}


@router.post("/theme/toggle")
async def toggle_theme(request: Request) -> dict[str, str]:
    return {"theme": get_theme(request).toggle_theme().value}


@router.get("/photos", dependencies=[Depends(require_session)])
async def list_photos(request: Request) -> dict[str, object]:
    """Return all photos, newest first."""
    photos = get_container(request).photo_service.list_photos()
    return {"photos": [_serialize_photo(photo) for photo in photos]}


@router.get("/photos/{photo_id}", dependencies=[Depends(require_session)])
async def photo_detail(photo_id: UUID, request: Request) -> dict[str, object]:
    """Return a photo with its viewer URL and neighbours."""
    photo_service = get_container(request).photo_service
    photo = photo_service.get_photo(photo_id)
    navigator = PhotoNavigator(photo_service.list_photos())
    previous = navigator.previous(photo.id)
    following = navigator.next(photo.id)
    return {
        "photo": _serialize_photo(photo),
        "display_url": build_display_url(photo.media_url, VIEWER_OPTIONS),
        "previous_id": str(previous.id) if previous else None,
        "next_id": str(following.id) if following else None,
        "has_previous": previous is not None,
        "has_next": following is not None,
    }


@router.post("/photos", dependencies=[Depends(require_session)])
async def upload_photos(
    request: Request,
    files: list[UploadFile] = File(default=[]),  # noqa: B008
    title: str | None = Form(None),
    description: str | None = Form(None),
) -> JSONResponse:
    """Upload a batch of images sequentially."""
    selected = [
        SelectedFile(
            filename=upload.filename or "",
            content_type=upload.content_type or "",
            content=await upload.read(),
        )
        for upload in files
    ]
    summary = await get_container(request).upload_service.upload_batch(
        selected, title=title, description=description
    )
    if summary.succeeded:
        status_code = status.HTTP_201_CREATED
    elif summary.failure_count:
        status_code = status.HTTP_502_BAD_GATEWAY
    else:
        status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    return JSONResponse(status_code=status_code, content=_serialize_summary(summary))


def _serialize_photo(photo: Photo) -> dict[str, object]:
    return {
        "id": str(photo.id),
        "title": photo.title,
        "description": photo.description,
        "media_url": photo.media_url,
        "media_id": photo.media_id,
        "created_at": photo.created_at.isoformat(),
        "thumbnail_url": build_display_url(photo.media_url, THUMBNAIL_OPTIONS),
    }


def _serialize_summary(summary: BatchUploadSummary) -> dict[str, object]:
    if summary.succeeded:
        noun = "photo" if summary.success_count == 1 else "photos"
        message = f"Uploaded {summary.success_count} {noun}."
        if summary.error_message:
            message = f"{message} {summary.error_message}"
    else:
        message = summary.error_message or "Failed to upload photos."
    return {
        "succeeded": summary.succeeded,
        "status": summary.status.value,
        "success_count": summary.success_count,
        "failure_count": summary.failure_count,
        "rejected": summary.rejected,
        "message": message,
        "photos": [_serialize_photo(photo) for photo in summary.photos],
    }

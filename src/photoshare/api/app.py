"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, Response

from photoshare.api.admin import router as admin_router
from photoshare.api.dependencies import COLOR_SCHEME_HINT, format_error
from photoshare.api.pages import router as pages_router
from photoshare.api.rest import router as rest_router
from photoshare.app_logging import configure_logging
from photoshare.containers import AppContainer
from photoshare.domain.errors import (
    NotFoundError,
    StoreError,
    UploadError,
    ValidationError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(pages_router)
    app.include_router(rest_router)
    app.include_router(admin_router)

    @app.middleware("http")
    async def client_cookie(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """Identify the browser so its stored session and theme can be found."""
        settings = container.settings
        registry = container.client_storage
        client_id = request.cookies.get(settings.client_cookie_name)
        issued = not registry.is_issued(client_id)
        if issued:
            client_id = registry.issue()
        request.state.client_id = client_id
        response = await call_next(request)
        # Request the OS colour scheme, including on the very first request.
        response.headers["Accept-CH"] = COLOR_SCHEME_HINT
        response.headers["Critical-CH"] = COLOR_SCHEME_HINT
        response.headers["Vary"] = COLOR_SCHEME_HINT
        if issued:
            response.set_cookie(
                settings.client_cookie_name,
                client_id,
                httponly=True,
                samesite="lax",
                secure=settings.environment != "local",
            )
        return response

    @app.exception_handler(ValidationError)
    async def validation_error(_: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_error(_: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Photo not found"},
        )

    @app.exception_handler(StoreError)
    async def store_error(_: Request, exc: StoreError) -> JSONResponse:
        logger.error("Data store request failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": format_error(container, exc)},
        )

    @app.exception_handler(UploadError)
    async def upload_error(_: Request, exc: UploadError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": format_error(container, exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app

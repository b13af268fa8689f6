"""
HTTP view over the studio.

The browser page talks to a single in-memory studio; every endpoint returns
the same state snapshot so the page can re-render from it.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import cast

from fastapi import APIRouter, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import FileResponse, Response

from placement_studio.entities.errors import (
    NoResultError,
    PreviewNotFoundError,
    StudioBusyError,
)
from placement_studio.entities.image import IMAGE_SLOTS, ImageSlot, UploadedImage
from placement_studio.entities.studio_state import StudioSnapshot, StudioState
from placement_studio.services.PreviewService.preview_service_interface import (
    PreviewServiceInterface,
)
from placement_studio.services.StudioService.studio_service_interface import (
    StudioServiceInterface,
)

STATIC_DIR = Path(__file__).resolve().parent / "static"

router = APIRouter()


def _studio(request: Request) -> StudioServiceInterface:
    return request.app.state.studio


def _previews(request: Request) -> PreviewServiceInterface:
    return request.app.state.preview_service


def build_snapshot(state: StudioState) -> StudioSnapshot:
    def preview_url(image: UploadedImage | None) -> str | None:
        if image is None:
            return None
        return f"/previews/{image.preview_handle}"

    return {
        "status": state.status.value,
        "is_loading": state.is_loading,
        "can_generate": state.can_generate,
        "error_message": state.error_message,
        "result": state.result,
        "character_preview_url": preview_url(state.character_image),
        "product_preview_url": preview_url(state.product_image),
    }


@router.get("/", include_in_schema=False)
async def index() -> FileResponse:
    return FileResponse(STATIC_DIR / "index.html", media_type="text/html")


@router.get("/api/state")
async def get_state(request: Request) -> StudioSnapshot:
    return build_snapshot(_studio(request).state)


@router.post("/api/images/{slot}")
async def upload_image(
    request: Request, slot: str, file: UploadFile = File(...)
) -> StudioSnapshot:
    if slot not in IMAGE_SLOTS:
        raise HTTPException(status_code=404, detail=f"Unknown image slot: {slot}")

    raw_bytes = await file.read()
    try:
        state = await _studio(request).select_image(
            slot=cast(ImageSlot, slot),
            raw_bytes=raw_bytes,
            mime_type=file.content_type,
            file_name=file.filename,
        )
    except StudioBusyError as error:
        raise HTTPException(status_code=409, detail=str(error)) from error
    finally:
        await file.close()

    return build_snapshot(state)


@router.post("/api/generate")
async def generate(request: Request) -> StudioSnapshot:
    return build_snapshot(await _studio(request).generate())


@router.post("/api/reset")
async def reset(request: Request) -> StudioSnapshot:
    try:
        state = _studio(request).reset()
    except StudioBusyError as error:
        raise HTTPException(status_code=409, detail=str(error)) from error
    return build_snapshot(state)


@router.get("/api/download")
async def download(request: Request) -> Response:
    try:
        data, mime_type, file_name = _studio(request).download()
    except NoResultError as error:
        raise HTTPException(status_code=404, detail=str(error)) from error

    return Response(
        content=data,
        media_type=mime_type,
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )


@router.get("/previews/{handle}")
async def get_preview(request: Request, handle: str) -> Response:
    try:
        data, mime_type = _previews(request).get(handle)
    except PreviewNotFoundError as error:
        raise HTTPException(status_code=404, detail=str(error)) from error

    return Response(
        content=data, media_type=mime_type, headers={"Cache-Control": "no-store"}
    )


def create_app(
    studio: StudioServiceInterface,
    preview_service: PreviewServiceInterface,
    logger: logging.Logger,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Product placement studio started")
        try:
            yield
        finally:
            studio.close()
            preview_service.release_all()
            logger.info("Product placement studio stopped")

    app = FastAPI(
        title="Product Placement Studio",
        description="Place a character and a product into one generated image.",
        lifespan=lifespan,
    )
    app.state.studio = studio
    app.state.preview_service = preview_service
    app.include_router(router)
    return app

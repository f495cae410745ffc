from __future__ import annotations

import asyncio
import logging
import os
from typing import BinaryIO, Iterator, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from config.settings import Settings, get_settings
from gallery import ImageGallery
from gallery.core import NoImagesError


logger = logging.getLogger("gallery")

CONTENT_TYPE = "image/jpeg"
CHUNK_SIZE = 64 * 1024


class HealthStatus(BaseModel):
    status: str = "ok"
    images: int = Field(..., description="Number of images listed at startup")
    ordered_served: int = Field(..., description="Requests handed a slot by /ordered/ so far")


def _stream_file(handle: BinaryIO, path: str) -> Iterator[bytes]:
    try:
        while True:
            chunk = handle.read(CHUNK_SIZE)
            if not chunk:
                break
            yield chunk
    except OSError as exc:
        # Headers are already on the wire; the client sees a truncated body.
        logger.error("Error serving %s: %s", path, exc)
    finally:
        handle.close()


def _open_image(path: str) -> StreamingResponse:
    try:
        handle = open(path, "rb")
    except OSError:
        logger.exception("Failed to open %s", path)
        raise HTTPException(status_code=500, detail="Failed to open image")

    try:
        size = os.fstat(handle.fileno()).st_size
    except OSError:
        handle.close()
        logger.exception("Failed to stat %s", path)
        raise HTTPException(status_code=500, detail="Failed to open image")

    return StreamingResponse(
        _stream_file(handle, path),
        media_type=CONTENT_TYPE,
        headers={"Content-Length": str(size)},
    )


def create_app(gallery: ImageGallery, settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Image Gallery Server", version="1.0.0")
    app.state.gallery = gallery

    # CORS: let local front-ends embed images during development
    if settings.is_dev:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_methods=["GET"],
            allow_headers=["*"],
        )

    async def serve(pick) -> StreamingResponse:
        try:
            path = pick()
        except NoImagesError as exc:
            logger.warning("Image requested but the gallery is empty")
            raise HTTPException(status_code=503, detail=str(exc))

        if gallery.delay > 0:
            await asyncio.sleep(gallery.delay)

        logger.info("Serving %s", path)
        return _open_image(path)

    @app.get("/random/")
    async def random_image() -> StreamingResponse:
        return await serve(gallery.random_image)

    @app.get("/ordered/")
    async def ordered_image() -> StreamingResponse:
        return await serve(gallery.next_image)

    @app.get("/health", response_model=HealthStatus)
    def health() -> HealthStatus:
        return HealthStatus(images=len(gallery), ordered_served=gallery.ordered_served)

    return app

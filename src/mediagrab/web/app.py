"""FastAPI application exposing the metadata and download operations.

Routes
------
* ``GET /api/test`` — liveness probe.
* ``GET /api/detect?url=`` — platform detection.
* ``GET /api/youtube/info?url=`` / ``GET /api/instagram/info?url=``.
* ``GET /api/youtube/download?url=&quality=`` — redirect to the converter.
* ``GET /api/instagram/download?url=`` — redirect to the video file.

Handlers are plain ``def`` functions: FastAPI runs them in its worker
thread pool, so a slow upstream blocks only its own request.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse, Response

from mediagrab.config import Settings
from mediagrab.core.metadata_service import MetadataService
from mediagrab.core.models import DownloadTarget, Platform
from mediagrab.version import __version__

logger = logging.getLogger(__name__)


def _download_response(target: DownloadTarget) -> Response:
    if target.location is not None:
        return RedirectResponse(url=target.location, status_code=302)
    return JSONResponse(target.to_dict(), status_code=target.status_code)


def create_app(
    service: MetadataService | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Parameters
    ----------
    service:
        Pre-built service, mainly for tests.  When ``None`` one is
        assembled from *settings* via :mod:`mediagrab.bootstrap`.
    settings:
        Settings used to build the service; read from the environment
        when ``None``.
    """
    if service is None:
        from mediagrab.bootstrap import build_metadata_service

        service = build_metadata_service(settings or Settings.from_env())
    svc: MetadataService = service

    app = FastAPI(title="mediagrab", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/api/test")
    def api_test() -> dict[str, object]:
        return {"success": True, "message": "Server is working!"}

    @app.get("/api/detect")
    def api_detect(url: str | None = None) -> dict[str, object]:
        return svc.detect(url).to_dict()

    @app.get("/api/youtube/info")
    def api_youtube_info(url: str | None = None) -> dict[str, object]:
        return svc.fetch_youtube(url).to_dict()

    @app.get("/api/instagram/info")
    def api_instagram_info(url: str | None = None) -> dict[str, object]:
        return svc.fetch_instagram(url).to_dict()

    @app.get("/api/youtube/download")
    def api_youtube_download(url: str | None = None, quality: str = "360p") -> Response:
        target = svc.resolve_download(Platform.YOUTUBE, url, quality)
        logger.info("YouTube download %s (%s) → %s", url, quality, target.location or target.error)
        return _download_response(target)

    @app.get("/api/instagram/download")
    def api_instagram_download(url: str | None = None) -> Response:
        target = svc.resolve_download(Platform.INSTAGRAM, url)
        logger.info("Instagram download %s → %s", url, target.location or target.error)
        return _download_response(target)

    return app

"""Object graph assembly.

Both outer layers (CLI and HTTP surface) build their
:class:`~mediagrab.core.metadata_service.MetadataService` here so the
wiring of infra adapters into core services lives in one place.
"""

from __future__ import annotations

import logging

from mediagrab.config import Settings
from mediagrab.core.download_resolver import DownloadResolver
from mediagrab.core.instagram import InstagramFetcher
from mediagrab.core.metadata_service import MetadataService
from mediagrab.core.protocols import FormatProbe
from mediagrab.core.youtube import YouTubeFetcher
from mediagrab.infra.http_client import RequestsHttpClient
from mediagrab.infra.ytdlp_probe import YtDlpFormatProbe

logger = logging.getLogger(__name__)


def build_metadata_service(settings: Settings) -> MetadataService:
    """Wire infra adapters into a ready-to-use :class:`MetadataService`."""
    http = RequestsHttpClient(timeout=settings.http_timeout)

    probe: FormatProbe | None = None
    if settings.probe_formats:
        probe = YtDlpFormatProbe(timeout=settings.http_timeout)
        logger.info("YouTube format probing enabled")

    instagram = InstagramFetcher(http, user_agent=settings.user_agent)
    return MetadataService(
        youtube=YouTubeFetcher(http, probe=probe),
        instagram=instagram,
        resolver=DownloadResolver(instagram, converter_url=settings.converter_url),
    )

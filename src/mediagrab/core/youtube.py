"""YouTube metadata fetcher and normaliser.

Metadata comes from the public oEmbed endpoint keyed by the canonical
watch URL.  Only the title and channel name are taken from it; the
thumbnail is built from the video ID and the format list comes from
the catalog in :mod:`mediagrab.core.format_catalog`.

Guarantees
----------
* :meth:`YouTubeFetcher.fetch` never raises — every failure becomes a
  ``MetadataResult`` with ``success=False`` and a ``"YouTube: "`` prefix.
* No direct network or library imports; I/O goes through the injected
  :class:`~mediagrab.core.protocols.HttpClient`.
"""

from __future__ import annotations

import logging
from typing import Any

from mediagrab.core.format_catalog import select_available_variants, youtube_catalog
from mediagrab.core.models import FormatVariant, MetadataResult
from mediagrab.core.protocols import FormatProbe, HttpClient
from mediagrab.exceptions import MediagrabError

logger = logging.getLogger(__name__)

OEMBED_ENDPOINT: str = "https://www.youtube.com/oembed"
ERROR_PREFIX: str = "YouTube: "
DEFAULT_TITLE: str = "YouTube Video"
DEFAULT_CHANNEL: str = "YouTube"


def build_watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def build_thumbnail_url(video_id: str) -> str:
    """Max-resolution thumbnail URL.

    Not verified upstream: videos without a maxres image answer 404.
    """
    return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"


def _text_or(value: object, fallback: str) -> str:
    if isinstance(value, str) and value:
        return value
    return fallback


def normalize_oembed(
    video_id: str,
    payload: dict[str, Any],
    formats: tuple[FormatVariant, ...],
) -> MetadataResult:
    """Convert an oEmbed payload into a successful :class:`MetadataResult`."""
    return MetadataResult(
        success=True,
        title=_text_or(payload.get("title"), DEFAULT_TITLE),
        thumbnail=build_thumbnail_url(video_id),
        channel=_text_or(payload.get("author_name"), DEFAULT_CHANNEL),
        video_id=video_id,
        formats=formats,
    )


class YouTubeFetcher:
    """Fetch and normalise metadata for one YouTube video.

    Parameters
    ----------
    http:
        Outbound transport satisfying :class:`HttpClient`.
    probe:
        Optional :class:`FormatProbe`.  When given, the static catalog
        is narrowed to the formats the video really offers.
    """

    def __init__(self, http: HttpClient, probe: FormatProbe | None = None) -> None:
        self._http: HttpClient = http
        self._probe: FormatProbe | None = probe

    def fetch(self, video_id: str) -> MetadataResult:
        """Return metadata for *video_id*; never raises."""
        watch_url = build_watch_url(video_id)
        logger.debug("Requesting oEmbed for %s", watch_url)
        try:
            payload = self._http.get_json(
                OEMBED_ENDPOINT,
                params={"url": watch_url, "format": "json"},
            )
        except MediagrabError as exc:
            logger.warning("oEmbed lookup failed for %s: %s", video_id, exc)
            return MetadataResult.failure(ERROR_PREFIX + (str(exc) or "Video not available"))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected oEmbed failure for %s", video_id)
            return MetadataResult.failure(ERROR_PREFIX + (str(exc) or "Video not available"))

        return normalize_oembed(video_id, payload, self._formats(watch_url))

    # ------------------------------------------------------------------
    # Format catalog
    # ------------------------------------------------------------------

    def _formats(self, watch_url: str) -> tuple[FormatVariant, ...]:
        if self._probe is None:
            return youtube_catalog()

        try:
            raw_formats = self._probe.fetch_formats(watch_url)
        except MediagrabError as exc:
            logger.warning("Format probe failed, using static catalog: %s", exc)
            return youtube_catalog()

        selected = select_available_variants(raw_formats)
        if not selected:
            logger.warning("Format probe matched no catalog entry for %s", watch_url)
            return youtube_catalog()
        return selected

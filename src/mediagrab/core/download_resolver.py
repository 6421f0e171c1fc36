"""Download redirect resolution.

mediagrab never downloads or transcodes media itself.  YouTube
downloads are handed to an external conversion service by building a
URL on its template; Instagram downloads redirect straight to the
video file found in the post's Open Graph tags.  Availability and
correctness of YouTube downloads therefore depend on the converter.

Guarantees
----------
* :meth:`DownloadResolver.resolve` never raises.
* No retries and no caching of resolved URLs between calls.
"""

from __future__ import annotations

import logging

from mediagrab.core.identifiers import extract_youtube_id
from mediagrab.core.instagram import ERROR_PREFIX as INSTAGRAM_ERROR_PREFIX
from mediagrab.core.instagram import InstagramFetcher
from mediagrab.core.models import DownloadTarget, Platform
from mediagrab.core.youtube import build_watch_url

logger = logging.getLogger(__name__)

DEFAULT_QUALITY: str = "360p"

# quality → converter query suffix
_CONVERTER_FORMATS: dict[str, str] = {
    "360p": "f=mp4&quality=360",
    "720p": "f=mp4&quality=720",
    "1080p": "f=mp4&quality=1080",
    "audio": "f=mp3",
}

SUPPORTED_QUALITIES: tuple[str, ...] = tuple(_CONVERTER_FORMATS)


def build_converter_url(converter_url: str, video_id: str, quality: str | None) -> str:
    """Build the converter redirect for *video_id*.

    Unknown or missing *quality* falls back to 360p.  The watch URL is
    embedded unencoded, which is the form the converter expects.
    """
    suffix = _CONVERTER_FORMATS.get(
        quality or DEFAULT_QUALITY,
        _CONVERTER_FORMATS[DEFAULT_QUALITY],
    )
    return f"{converter_url}?url={build_watch_url(video_id)}&{suffix}"


def _coerce_platform(platform: Platform | str) -> Platform:
    if isinstance(platform, Platform):
        return platform
    try:
        return Platform(platform.strip().lower())
    except ValueError:
        return Platform.UNSUPPORTED


class DownloadResolver:
    """Turn a page URL and a quality into a redirect target.

    Parameters
    ----------
    instagram:
        Fetcher used to look up the direct video URL of a post.
    converter_url:
        Base URL of the external YouTube conversion service.
    """

    def __init__(self, instagram: InstagramFetcher, converter_url: str) -> None:
        self._instagram: InstagramFetcher = instagram
        self._converter_url: str = converter_url

    def resolve(
        self,
        platform: Platform | str,
        url: str | None,
        quality: str | None = None,
    ) -> DownloadTarget:
        if not url or not url.strip():
            return DownloadTarget.failure("URL required", status_code=400)

        match _coerce_platform(platform):
            case Platform.YOUTUBE:
                return self._resolve_youtube(url, quality)
            case Platform.INSTAGRAM:
                return self._resolve_instagram(url)
            case _:
                return DownloadTarget.failure("Unsupported platform")

    def _resolve_youtube(self, url: str, quality: str | None) -> DownloadTarget:
        video_id = extract_youtube_id(url)
        if video_id is None:
            return DownloadTarget.failure("Invalid YouTube URL")
        location = build_converter_url(self._converter_url, video_id, quality)
        logger.debug("YouTube download for %s → %s", video_id, location)
        return DownloadTarget.redirect(location)

    def _resolve_instagram(self, url: str) -> DownloadTarget:
        result = self._instagram.fetch(url)
        if result.success and result.video_url:
            return DownloadTarget.redirect(result.video_url)
        # Upstream failures keep their message; image posts and empty
        # pages both mean there is nothing to redirect to.
        error = result.error or ""
        if error.startswith(INSTAGRAM_ERROR_PREFIX):
            return DownloadTarget.failure(error)
        return DownloadTarget.failure("No video found")

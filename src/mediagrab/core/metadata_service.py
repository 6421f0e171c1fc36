"""Core metadata service — the public operations of the pipeline.

This is the facade consumed by the CLI and the HTTP surface.  Its
collaborators are injected at construction time (dependency
inversion), keeping the core free of any external-system imports.

Guarantees
----------
* Stateless — nothing is cached or shared between calls.
* Never raises for bad input or upstream failure: every operation
  returns a structured result carrying ``success`` and ``error``.
"""

from __future__ import annotations

from mediagrab.core.download_resolver import DownloadResolver
from mediagrab.core.identifiers import extract_youtube_id
from mediagrab.core.instagram import InstagramFetcher
from mediagrab.core.models import DetectionResult, DownloadTarget, MetadataResult, Platform
from mediagrab.core.platform import detect_platform
from mediagrab.core.youtube import YouTubeFetcher
from mediagrab.exceptions import (
    InputMissingError,
    InvalidIdentifierError,
    MediagrabError,
    UnsupportedPlatformError,
)


class MetadataService:
    """Platform detection, metadata fetches and download resolution.

    Parameters
    ----------
    youtube:
        Fetcher for YouTube oEmbed metadata.
    instagram:
        Fetcher for Instagram Open Graph metadata.
    resolver:
        Resolver producing download redirect targets.
    """

    def __init__(
        self,
        youtube: YouTubeFetcher,
        instagram: InstagramFetcher,
        resolver: DownloadResolver,
    ) -> None:
        self._youtube: YouTubeFetcher = youtube
        self._instagram: InstagramFetcher = instagram
        self._resolver: DownloadResolver = resolver

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def detect(self, url: str | None) -> DetectionResult:
        try:
            platform = self._classify(url)
        except MediagrabError as exc:
            return DetectionResult(success=False, error=str(exc))
        return DetectionResult(success=True, platform=platform)

    def fetch_youtube(self, url: str | None) -> MetadataResult:
        try:
            video_id = self._youtube_id(url)
        except MediagrabError as exc:
            return MetadataResult.failure(str(exc))
        return self._youtube.fetch(video_id)

    def fetch_instagram(self, url: str | None) -> MetadataResult:
        try:
            page_url = self._require_platform(url, Platform.INSTAGRAM)
        except MediagrabError as exc:
            return MetadataResult.failure(str(exc))
        return self._instagram.fetch(page_url)

    def fetch(self, url: str | None) -> MetadataResult:
        """Detect the platform of *url* and run the matching fetch."""
        detection = self.detect(url)
        if detection.platform is Platform.YOUTUBE:
            return self.fetch_youtube(url)
        if detection.platform is Platform.INSTAGRAM:
            return self.fetch_instagram(url)
        return MetadataResult.failure(detection.error or "Unsupported platform")

    def resolve_download(
        self,
        platform: Platform | str,
        url: str | None,
        quality: str | None = None,
    ) -> DownloadTarget:
        return self._resolver.resolve(platform, url, quality)

    # ------------------------------------------------------------------
    # Input validation
    # ------------------------------------------------------------------

    @staticmethod
    def _require_url(url: str | None) -> str:
        if url is None or not url.strip():
            raise InputMissingError("URL required")
        return url

    @classmethod
    def _classify(cls, url: str | None) -> Platform:
        """Return the platform of *url* or raise a typed input error."""
        platform = detect_platform(cls._require_url(url))
        if platform is Platform.UNSUPPORTED:
            raise UnsupportedPlatformError("Unsupported platform")
        return platform

    @classmethod
    def _require_platform(cls, url: str | None, expected: Platform) -> str:
        page_url = cls._require_url(url)
        if cls._classify(page_url) is not expected:
            raise UnsupportedPlatformError("Unsupported platform")
        return page_url

    @classmethod
    def _youtube_id(cls, url: str | None) -> str:
        page_url = cls._require_platform(url, Platform.YOUTUBE)
        video_id = extract_youtube_id(page_url)
        if video_id is None:
            raise InvalidIdentifierError("Invalid YouTube URL")
        return video_id

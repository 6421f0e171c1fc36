"""yt-dlp backed implementation of :class:`~mediagrab.core.protocols.FormatProbe`.

This module is the **only** place in the codebase that imports
``yt_dlp``.  It is used solely to list the formats a YouTube video
really offers; nothing is downloaded.  All yt-dlp exceptions are
caught here and re-raised as typed
:class:`~mediagrab.exceptions.MediagrabError` subclasses.
"""

from __future__ import annotations

import logging
from typing import Any

from mediagrab.exceptions import EnvironmentError, UpstreamFetchError, UpstreamParseError

logger = logging.getLogger(__name__)


class YtDlpFormatProbe:
    """Concrete :class:`FormatProbe` backed by the yt-dlp Python API.

    Usage::

        probe = YtDlpFormatProbe(timeout=15.0)
        formats = probe.fetch_formats("https://www.youtube.com/watch?v=...")
    """

    # Substrings in yt-dlp error messages that indicate the video itself
    # is unavailable (as opposed to a transient or extraction error).
    _UNAVAILABLE_SIGNALS: tuple[str, ...] = (
        "unavailable",
        "private video",
        "removed",
        "not available",
        "sign in to confirm your age",
    )

    def __init__(self, timeout: float) -> None:
        self._timeout: float = timeout

    def _build_opts(self) -> dict[str, Any]:
        """Return yt-dlp options suitable for metadata-only extraction."""
        return {
            "quiet": True,
            "no_warnings": True,
            "no_color": True,
            "skip_download": True,
            "socket_timeout": self._timeout,
        }

    # ------------------------------------------------------------------
    # Protocol method
    # ------------------------------------------------------------------

    def fetch_formats(self, url: str) -> list[dict[str, Any]]:
        """List raw format dicts for *url* without downloading.

        Raises
        ------
        EnvironmentError
            When yt-dlp is not installed.
        UpstreamFetchError
            When yt-dlp cannot extract the video.
        UpstreamParseError
            When yt-dlp returns no usable info dict.
        """
        try:
            import yt_dlp
            import yt_dlp.utils
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "yt-dlp is not installed. Install with: pip install yt-dlp",
            ) from exc

        logger.debug("Probing formats for %s", url)
        try:
            with yt_dlp.YoutubeDL(self._build_opts()) as ydl:
                info: Any = ydl.extract_info(url, download=False)
        except yt_dlp.utils.DownloadError as exc:
            self._raise_mapped(exc)
        except Exception as exc:
            raise UpstreamFetchError(
                f"Unexpected yt-dlp error: {exc}",
            ) from exc

        if not isinstance(info, dict):
            raise UpstreamParseError(
                "yt-dlp returned no metadata for the given URL.",
            )

        raw: object = info.get("formats")
        if not isinstance(raw, list):
            return []
        # Skip malformed entries.
        return [entry for entry in raw if isinstance(entry, dict)]

    # ------------------------------------------------------------------
    # Exception mapping
    # ------------------------------------------------------------------

    @classmethod
    def _raise_mapped(cls, exc: Exception) -> None:
        """Translate a yt-dlp ``DownloadError`` into a domain exception."""
        msg_lower = str(exc).lower()
        if any(signal in msg_lower for signal in cls._UNAVAILABLE_SIGNALS):
            raise UpstreamFetchError(
                str(exc),
                hint="The video may be private, removed, or geo-restricted.",
            ) from exc
        raise UpstreamFetchError(str(exc)) from exc

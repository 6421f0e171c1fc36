"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — preserving the dependency inversion principle.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class HttpClient(Protocol):
    """Contract for the outbound HTTP transport.

    Implementations must enforce a timeout on every call and map all
    transport exceptions to :class:`~mediagrab.exceptions.MediagrabError`
    subclasses.
    """

    def get_json(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        """GET *url* and decode the body as a JSON object.

        Raises
        ------
        UpstreamFetchError
            On network failure, timeout, or a non-2xx status.
        UpstreamParseError
            When the body is not a JSON object.
        """
        ...  # pragma: no cover

    def get_text(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        """GET *url* and return the decoded body text.

        Raises
        ------
        UpstreamFetchError
            On network failure, timeout, or a non-2xx status.
        """
        ...  # pragma: no cover


class FormatProbe(Protocol):
    """Contract for backends that list the formats a video really offers."""

    def fetch_formats(self, url: str) -> list[dict[str, Any]]:
        """Return raw format dicts for the video page at *url*.

        Each dict may carry ``height``, ``vcodec`` and ``acodec`` keys
        in the shape yt-dlp reports them.

        Raises
        ------
        UpstreamFetchError
            When the backend cannot reach or extract the video.
        EnvironmentError
            When the backend library is not installed.
        """
        ...  # pragma: no cover

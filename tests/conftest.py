"""Shared pytest fixtures and configuration for the mediagrab test suite.

Guidelines
----------
* No internet access in any test.
* ``requests`` and yt-dlp are mocked at the infra boundary; core tests
  use a mocked :class:`HttpClient`.
* Tests must not depend on OS state or the caller's environment.
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from mediagrab.core.download_resolver import DownloadResolver
from mediagrab.core.instagram import InstagramFetcher
from mediagrab.core.metadata_service import MetadataService
from mediagrab.core.youtube import YouTubeFetcher

VIDEO_ID = "dQw4w9WgXcQ"
WATCH_URL = f"https://www.youtube.com/watch?v={VIDEO_ID}"
INSTAGRAM_URL = "https://www.instagram.com/p/Cxyz123/"
CONVERTER_URL = "https://loader.to/api/button/"
USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


def og_page(tags: dict[str, str]) -> str:
    """Build an HTML page carrying the given Open Graph meta tags."""
    metas = "\n".join(
        f'    <meta property="{name}" content="{value}">'
        for name, value in tags.items()
    )
    return f"<html>\n<head>\n{metas}\n</head>\n<body></body>\n</html>"


def fake_http(
    *,
    json: dict[str, Any] | Exception | None = None,
    text: str | Exception | None = None,
) -> MagicMock:
    """Return a mock HttpClient.

    Values are returned from ``get_json`` / ``get_text``; exceptions are
    raised from them.
    """
    http = MagicMock()
    if isinstance(json, Exception):
        http.get_json.side_effect = json
    else:
        http.get_json.return_value = json if json is not None else {}
    if isinstance(text, Exception):
        http.get_text.side_effect = text
    else:
        http.get_text.return_value = text if text is not None else ""
    return http


def build_service(http: MagicMock, probe: MagicMock | None = None) -> MetadataService:
    instagram = InstagramFetcher(http, user_agent=USER_AGENT)
    return MetadataService(
        youtube=YouTubeFetcher(http, probe=probe),
        instagram=instagram,
        resolver=DownloadResolver(instagram, converter_url=CONVERTER_URL),
    )


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Strip mediagrab variables so defaults apply in every test."""
    for name in (
        "MEDIAGRAB_HTTP_TIMEOUT",
        "MEDIAGRAB_USER_AGENT",
        "MEDIAGRAB_CONVERTER_URL",
        "MEDIAGRAB_PROBE_FORMATS",
        "MEDIAGRAB_HOST",
        "MEDIAGRAB_PORT",
        "MEDIAGRAB_LOG_LEVEL",
        "PORT",
    ):
        monkeypatch.delenv(name, raising=False)

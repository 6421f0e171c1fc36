"""Instagram metadata fetcher and normaliser.

Instagram offers no public metadata API, so the post page itself is
fetched with a desktop-browser ``User-Agent`` and its Open Graph
``<meta property="og:*">`` tags are read.  This depends entirely on
Instagram's page markup and is the most fragile part of the pipeline:
login walls and rate-limit pages simply carry no usable tags and end
up as :class:`EmptyPage`.

A page is classified into exactly one of three variants:

* :class:`VideoPost` — an ``og:video`` / ``og:video:url`` tag exists.
* :class:`ImagePost` — no video, but an ``og:image`` tag exists.
* :class:`EmptyPage` — neither.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import assert_never

from bs4 import BeautifulSoup

from mediagrab.core.format_catalog import instagram_variants
from mediagrab.core.models import MetadataResult
from mediagrab.core.protocols import HttpClient
from mediagrab.exceptions import MediagrabError

logger = logging.getLogger(__name__)

ERROR_PREFIX: str = "Instagram: "
NOT_FOUND_ERROR: str = "No video/image found"
DEFAULT_VIDEO_TITLE: str = "Instagram Video"
DEFAULT_IMAGE_TITLE: str = "Instagram Post"


# ---------------------------------------------------------------------------
# Page variants
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class VideoPost:
    video_url: str
    thumbnail: str | None
    title: str | None


@dataclass(frozen=True, slots=True)
class ImagePost:
    image_url: str
    title: str | None


@dataclass(frozen=True, slots=True)
class EmptyPage:
    pass


InstagramPage = VideoPost | ImagePost | EmptyPage


# ---------------------------------------------------------------------------
# Parsing (pure)
# ---------------------------------------------------------------------------

def parse_open_graph(html: str) -> dict[str, str]:
    """Collect ``og:*`` meta tags into a dict; the first occurrence wins."""
    soup = BeautifulSoup(html, "html.parser")
    tags: dict[str, str] = {}
    for meta in soup.find_all("meta", attrs={"property": True, "content": True}):
        prop = str(meta["property"]).strip()
        content = str(meta["content"]).strip()
        if prop.startswith("og:") and content and prop not in tags:
            tags[prop] = content
    return tags


def _first(tags: Mapping[str, str], *names: str) -> str | None:
    for name in names:
        value = tags.get(name)
        if value:
            return value
    return None


def classify_page(tags: Mapping[str, str]) -> InstagramPage:
    """Decide which of the three page variants *tags* describe."""
    title = _first(tags, "og:title", "og:description")
    thumbnail = _first(tags, "og:image")
    video_url = _first(tags, "og:video", "og:video:url")

    if video_url is not None:
        return VideoPost(video_url=video_url, thumbnail=thumbnail, title=title)
    if thumbnail is not None:
        return ImagePost(image_url=thumbnail, title=title)
    return EmptyPage()


def normalize_page(page: InstagramPage) -> MetadataResult:
    """Convert a classified page into a :class:`MetadataResult`."""
    match page:
        case VideoPost(video_url=video_url, thumbnail=thumbnail, title=title):
            return MetadataResult(
                success=True,
                title=title or DEFAULT_VIDEO_TITLE,
                thumbnail=thumbnail or "",
                video_url=video_url,
                formats=instagram_variants(video_url),
            )
        case ImagePost(image_url=image_url, title=title):
            return MetadataResult(
                success=True,
                title=title or DEFAULT_IMAGE_TITLE,
                thumbnail=image_url,
                image_url=image_url,
                is_image=True,
            )
        case EmptyPage():
            return MetadataResult.failure(NOT_FOUND_ERROR)
        case _:
            assert_never(page)


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------

class InstagramFetcher:
    """Fetch an Instagram post page and normalise its Open Graph tags.

    Parameters
    ----------
    http:
        Outbound transport satisfying :class:`HttpClient`.
    user_agent:
        Browser ``User-Agent`` sent with the page request; Instagram
        serves bots a page without media tags.
    """

    def __init__(self, http: HttpClient, user_agent: str) -> None:
        self._http: HttpClient = http
        self._user_agent: str = user_agent

    def fetch_page(self, url: str) -> InstagramPage:
        """Fetch and classify *url*.

        Raises
        ------
        UpstreamFetchError
            When the page cannot be retrieved.
        """
        logger.debug("Fetching Instagram page %s", url)
        html = self._http.get_text(url, headers={"User-Agent": self._user_agent})
        page = classify_page(parse_open_graph(html))
        logger.debug("Instagram page %s classified as %s", url, type(page).__name__)
        return page

    def fetch(self, url: str) -> MetadataResult:
        """Return metadata for the post at *url*; never raises."""
        try:
            page = self.fetch_page(url)
        except MediagrabError as exc:
            logger.warning("Instagram fetch failed for %s: %s", url, exc)
            return MetadataResult.failure(ERROR_PREFIX + (str(exc) or "Content not available"))
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected Instagram failure for %s", url)
            return MetadataResult.failure(ERROR_PREFIX + (str(exc) or "Content not available"))
        return normalize_page(page)

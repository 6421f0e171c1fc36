"""YouTube video-ID extraction from raw URL strings.

Each known URL shape is a named matcher.  Every matcher looks for the
last occurrence of its marker, and the marker that sits furthest right
in the URL decides the candidate, so ``/embed/videoseries?...&v=ID``
yields ``ID``.  Only that one candidate is checked against the
11-character rule; there is no fallback to an earlier marker.

Path markers are anchored on ``/`` (``/v/``, ``/embed/``), so ``v/``
glued to a preceding word does not count as a marker.  Shapes outside
the table (localized domains, ``/shorts/``, playlist pages without
``v=``) yield ``None``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

VIDEO_ID_LENGTH: int = 11

_VIDEO_ID_RE: re.Pattern[str] = re.compile(rf"[A-Za-z0-9_-]{{{VIDEO_ID_LENGTH}}}")


@dataclass(frozen=True, slots=True)
class MarkerHit:
    """Where a matcher's last marker starts, and the run of text after it."""

    position: int
    candidate: str


@dataclass(frozen=True, slots=True)
class IdentifierMatcher:
    """A single URL shape: a marker followed by the candidate ID."""

    name: str
    pattern: re.Pattern[str]

    def locate(self, url: str) -> MarkerHit | None:
        """Return the last occurrence of the marker in *url*, if any."""
        match = self.pattern.match(url)
        if match is None:
            return None
        return MarkerHit(position=match.start("marker"), candidate=match.group("id"))

    def candidate(self, url: str) -> str | None:
        """Return the raw run of characters after the last marker, if present."""
        hit = self.locate(url)
        return None if hit is None else hit.candidate


def _matcher(name: str, marker: str) -> IdentifierMatcher:
    # Greedy prefix: the marker group lands on its last occurrence.
    # The candidate runs up to the next fragment or query delimiter.
    return IdentifierMatcher(
        name,
        re.compile(rf".*(?P<marker>{marker})(?P<id>[^#&?]*)"),
    )


IDENTIFIER_MATCHERS: tuple[IdentifierMatcher, ...] = (
    _matcher("short_link", r"youtu\.be/"),
    _matcher("v_path", r"/v/"),
    _matcher("user_path", r"/u/\w/"),
    _matcher("embed_path", r"/embed/"),
    _matcher("query_v", r"\?v="),
    _matcher("query_amp_v", r"&v="),
)


def is_valid_video_id(candidate: str) -> bool:
    """``True`` when *candidate* is exactly 11 characters of ``[A-Za-z0-9_-]``."""
    return _VIDEO_ID_RE.fullmatch(candidate) is not None


def _rightmost_hit(url: str) -> MarkerHit | None:
    hits = [
        hit
        for hit in (matcher.locate(url) for matcher in IDENTIFIER_MATCHERS)
        if hit is not None
    ]
    if not hits:
        return None
    # max() keeps the first of equal positions, i.e. table order breaks ties.
    return max(hits, key=lambda hit: hit.position)


def extract_youtube_id(url: str) -> str | None:
    """Return the 11-character video ID carried by *url*, or ``None``.

    >>> extract_youtube_id("https://youtu.be/dQw4w9WgXcQ")
    'dQw4w9WgXcQ'
    >>> extract_youtube_id("https://youtube.com/watch?v=dQw4w9WgXcQ&t=5")
    'dQw4w9WgXcQ'
    """
    hit = _rightmost_hit(url)
    if hit is None or not is_valid_video_id(hit.candidate):
        return None
    return hit.candidate

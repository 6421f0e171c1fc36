"""URL → :class:`~mediagrab.core.models.Platform` classification.

Matching is plain substring containment on the raw string, in fixed
priority order.  No case folding, scheme check or host parsing is
performed, so lookalike hosts such as ``notyoutube.com`` classify as
YouTube.  Callers that need stricter matching must normalise first.
"""

from __future__ import annotations

from mediagrab.core.models import Platform

_PLATFORM_MARKERS: tuple[tuple[Platform, tuple[str, ...]], ...] = (
    (Platform.YOUTUBE, ("youtube.com", "youtu.be")),
    (Platform.INSTAGRAM, ("instagram.com",)),
)


def detect_platform(url: str) -> Platform:
    """Return the first platform whose marker occurs in *url*."""
    for platform, markers in _PLATFORM_MARKERS:
        if any(marker in url for marker in markers):
            return platform
    return Platform.UNSUPPORTED

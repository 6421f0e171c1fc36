"""Format variant catalogs and probe-based availability filtering.

The YouTube catalog is static: it is not derived from what the video
actually offers, because downloads are delegated to an external
converter that transcodes on demand.  When a format probe is
configured, :func:`select_available_variants` narrows the catalog to
renditions the video really has.

Every function here is a **pure** transformation — no I/O, no side
effects.

Probe pipeline order (enforced by :func:`select_available_variants`):

1. **Extract** — pull the heights and audio presence out of raw dicts.
2. **Filter** — keep catalog video variants whose height exists.
3. **Append** — keep the audio variant when an audio-only stream exists.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mediagrab.core.models import FormatVariant

YOUTUBE_VIDEO_VARIANTS: tuple[FormatVariant, ...] = (
    FormatVariant(quality="360p", has_video=True, has_audio=True, type="mp4"),
    FormatVariant(quality="720p", has_video=True, has_audio=True, type="mp4"),
    FormatVariant(quality="1080p", has_video=True, has_audio=True, type="mp4"),
)

YOUTUBE_AUDIO_VARIANTS: tuple[FormatVariant, ...] = (
    FormatVariant(quality="128kbps", has_video=False, has_audio=True, type="mp3"),
)

INSTAGRAM_QUALITY: str = "HD"


def youtube_catalog() -> tuple[FormatVariant, ...]:
    """Static YouTube catalog: three video variants, then one audio variant."""
    return YOUTUBE_VIDEO_VARIANTS + YOUTUBE_AUDIO_VARIANTS


def instagram_variants(video_url: str) -> tuple[FormatVariant, ...]:
    """Single HD variant pointing straight at the Instagram video file."""
    return (
        FormatVariant(
            quality=INSTAGRAM_QUALITY,
            has_video=True,
            has_audio=True,
            url=video_url,
        ),
    )


# ---------------------------------------------------------------------------
# 1. Extract
# ---------------------------------------------------------------------------

def _has_codec(value: object) -> bool:
    return isinstance(value, str) and value not in ("", "none")


def available_heights(raw_formats: Sequence[dict[str, Any]]) -> set[int]:
    """Heights of every raw format that carries a video stream."""
    return {
        raw["height"]
        for raw in raw_formats
        if isinstance(raw.get("height"), int) and _has_codec(raw.get("vcodec"))
    }


def has_audio_only_stream(raw_formats: Sequence[dict[str, Any]]) -> bool:
    """``True`` when any raw format is audio without video."""
    return any(
        _has_codec(raw.get("acodec")) and not _has_codec(raw.get("vcodec"))
        for raw in raw_formats
    )


# ---------------------------------------------------------------------------
# 2. Filter
# ---------------------------------------------------------------------------

def _catalog_height(variant: FormatVariant) -> int | None:
    """Parse ``"720p"`` → ``720``; ``None`` for non-resolution labels."""
    label = variant.quality
    if label.endswith("p") and label[:-1].isdigit():
        return int(label[:-1])
    return None


def filter_video_variants(
    variants: Sequence[FormatVariant],
    heights: set[int],
) -> list[FormatVariant]:
    """Keep the video variants whose resolution exists upstream."""
    return [
        variant
        for variant in variants
        if _catalog_height(variant) in heights
    ]


# ---------------------------------------------------------------------------
# Composite pipeline
# ---------------------------------------------------------------------------

def select_available_variants(
    raw_formats: Sequence[dict[str, Any]],
) -> tuple[FormatVariant, ...]:
    """Narrow the YouTube catalog to what *raw_formats* can deliver.

    Returns an empty tuple when nothing in the catalog is available;
    callers decide whether to fall back to :func:`youtube_catalog`.
    """
    entries = [raw for raw in raw_formats if isinstance(raw, dict)]
    selected = filter_video_variants(YOUTUBE_VIDEO_VARIANTS, available_heights(entries))
    if has_audio_only_stream(entries):
        selected.extend(YOUTUBE_AUDIO_VARIANTS)
    return tuple(selected)

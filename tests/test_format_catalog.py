"""Tests for format catalogs and probe filtering (core/format_catalog.py).

Every function under test is pure — no mocking required.
"""

from __future__ import annotations

from typing import Any

from mediagrab.core.format_catalog import (
    YOUTUBE_AUDIO_VARIANTS,
    YOUTUBE_VIDEO_VARIANTS,
    available_heights,
    filter_video_variants,
    has_audio_only_stream,
    instagram_variants,
    select_available_variants,
    youtube_catalog,
)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def _raw(
    *,
    height: int | None = 720,
    vcodec: str = "avc1.4d401f",
    acodec: str = "none",
) -> dict[str, Any]:
    """Raw format dict in the shape yt-dlp reports."""
    return {"height": height, "vcodec": vcodec, "acodec": acodec}


def _audio() -> dict[str, Any]:
    return _raw(height=None, vcodec="none", acodec="mp4a.40.2")


# ---------------------------------------------------------------------------
# Static catalogs
# ---------------------------------------------------------------------------

class TestYoutubeCatalog:
    def test_three_video_then_one_audio(self) -> None:
        catalog = youtube_catalog()
        assert [v.quality for v in catalog] == ["360p", "720p", "1080p", "128kbps"]
        assert sum(1 for v in catalog if v.has_video) == 3
        assert sum(1 for v in catalog if v.is_audio_only) == 1

    def test_video_variants_are_muxed_mp4(self) -> None:
        for variant in YOUTUBE_VIDEO_VARIANTS:
            assert variant.has_video and variant.has_audio
            assert variant.type == "mp4"

    def test_audio_variant_is_mp3(self) -> None:
        (audio,) = YOUTUBE_AUDIO_VARIANTS
        assert audio.type == "mp3"
        assert not audio.has_video


class TestInstagramVariants:
    def test_single_hd_variant_with_url(self) -> None:
        (variant,) = instagram_variants("https://cdn.example/v.mp4")
        assert variant.quality == "HD"
        assert variant.url == "https://cdn.example/v.mp4"
        assert variant.has_video and variant.has_audio


# ---------------------------------------------------------------------------
# Probe extraction
# ---------------------------------------------------------------------------

class TestAvailableHeights:
    def test_collects_video_heights(self) -> None:
        assert available_heights([_raw(height=360), _raw(height=1080)]) == {360, 1080}

    def test_ignores_audio_and_missing_height(self) -> None:
        assert available_heights([_audio(), _raw(height=None)]) == set()

    def test_ignores_non_int_height(self) -> None:
        assert available_heights([{"height": "720", "vcodec": "vp9"}]) == set()


class TestHasAudioOnlyStream:
    def test_true_with_audio_only(self) -> None:
        assert has_audio_only_stream([_raw(), _audio()])

    def test_false_for_muxed_only(self) -> None:
        assert not has_audio_only_stream([_raw(acodec="mp4a.40.2")])

    def test_missing_codecs_count_as_none(self) -> None:
        assert not has_audio_only_stream([{"height": 360}])


# ---------------------------------------------------------------------------
# Filter + composite
# ---------------------------------------------------------------------------

class TestFilterVideoVariants:
    def test_keeps_matching_heights_in_catalog_order(self) -> None:
        kept = filter_video_variants(YOUTUBE_VIDEO_VARIANTS, {1080, 360})
        assert [v.quality for v in kept] == ["360p", "1080p"]

    def test_no_heights_keeps_nothing(self) -> None:
        assert filter_video_variants(YOUTUBE_VIDEO_VARIANTS, set()) == []


class TestSelectAvailableVariants:
    def test_full_availability_matches_catalog(self) -> None:
        raw = [_raw(height=360), _raw(height=720), _raw(height=1080), _audio()]
        assert select_available_variants(raw) == youtube_catalog()

    def test_missing_1080_is_dropped(self) -> None:
        raw = [_raw(height=360), _raw(height=720), _audio()]
        assert [v.quality for v in select_available_variants(raw)] == [
            "360p", "720p", "128kbps",
        ]

    def test_no_audio_stream_drops_audio_variant(self) -> None:
        raw = [_raw(height=720)]
        assert [v.quality for v in select_available_variants(raw)] == ["720p"]

    def test_nothing_available_is_empty(self) -> None:
        assert select_available_variants([_raw(height=144)]) == ()

    def test_skips_malformed_entries(self) -> None:
        raw: list[Any] = ["junk", None, _raw(height=360)]
        assert [v.quality for v in select_available_variants(raw)] == ["360p"]

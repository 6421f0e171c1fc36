"""Tests for YouTube video-ID extraction (core/identifiers.py).

Each named matcher is exercised on its own, then the composite
:func:`extract_youtube_id` is checked for rightmost-marker selection and the
11-character rule.
"""

from __future__ import annotations

import pytest

from mediagrab.core.identifiers import (
    IDENTIFIER_MATCHERS,
    extract_youtube_id,
    is_valid_video_id,
)

VIDEO_ID = "dQw4w9WgXcQ"


def _matcher(name: str):  # type: ignore[no-untyped-def]
    return next(m for m in IDENTIFIER_MATCHERS if m.name == name)


# ---------------------------------------------------------------------------
# Matcher table
# ---------------------------------------------------------------------------

class TestMatcherTable:
    def test_order(self) -> None:
        assert [m.name for m in IDENTIFIER_MATCHERS] == [
            "short_link",
            "v_path",
            "user_path",
            "embed_path",
            "query_v",
            "query_amp_v",
        ]

    @pytest.mark.parametrize(
        ("name", "url"),
        [
            ("short_link", f"https://youtu.be/{VIDEO_ID}"),
            ("v_path", f"https://www.youtube.com/v/{VIDEO_ID}?version=3"),
            ("user_path", f"https://www.youtube.com/u/w/{VIDEO_ID}"),
            ("embed_path", f"https://www.youtube.com/embed/{VIDEO_ID}#t=3"),
            ("query_v", f"https://www.youtube.com/watch?v={VIDEO_ID}"),
            ("query_amp_v", f"https://www.youtube.com/watch?feature=share&v={VIDEO_ID}"),
        ],
    )
    def test_each_matcher_finds_candidate(self, name: str, url: str) -> None:
        assert _matcher(name).candidate(url) == VIDEO_ID

    def test_candidate_none_without_marker(self) -> None:
        assert _matcher("embed_path").candidate("https://youtu.be/x") is None

    def test_candidate_uses_last_marker(self) -> None:
        url = f"https://www.youtube.com/embed/first/embed/{VIDEO_ID}"
        assert _matcher("embed_path").candidate(url) == VIDEO_ID

    def test_locate_reports_marker_position(self) -> None:
        url = f"https://www.youtube.com/watch?v={VIDEO_ID}"
        hit = _matcher("query_v").locate(url)
        assert hit is not None
        assert url[hit.position:].startswith("?v=")

    def test_path_markers_need_leading_slash(self) -> None:
        assert _matcher("v_path").candidate(f"https://example.com/nav/{VIDEO_ID}") is None


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestIsValidVideoId:
    def test_eleven_chars(self) -> None:
        assert is_valid_video_id(VIDEO_ID)

    def test_dash_and_underscore(self) -> None:
        assert is_valid_video_id("a-b_c-d_e-f")

    @pytest.mark.parametrize("candidate", ["", "short", VIDEO_ID + "X", "dQw4w9WgXc!"])
    def test_rejects(self, candidate: str) -> None:
        assert not is_valid_video_id(candidate)


# ---------------------------------------------------------------------------
# extract_youtube_id
# ---------------------------------------------------------------------------

class TestExtractYoutubeId:
    def test_short_link(self) -> None:
        assert extract_youtube_id("https://youtu.be/dQw4w9WgXcQ") == VIDEO_ID

    def test_watch_with_extra_params(self) -> None:
        assert extract_youtube_id("https://youtube.com/watch?v=dQw4w9WgXcQ&t=5") == VIDEO_ID

    def test_short_link_with_tracking_query(self) -> None:
        assert extract_youtube_id("https://youtu.be/dQw4w9WgXcQ?si=abcdef") == VIDEO_ID

    def test_too_short_candidate_is_absent(self) -> None:
        assert extract_youtube_id("https://youtu.be/abc") is None

    def test_too_long_candidate_is_absent(self) -> None:
        assert extract_youtube_id("https://youtu.be/dQw4w9WgXcQextra") is None

    def test_trailing_slash_is_absent(self) -> None:
        assert extract_youtube_id("https://youtu.be/dQw4w9WgXcQ/") is None

    def test_rightmost_marker_wins(self) -> None:
        url = "https://www.youtube.com/embed/videoseries?list=PL1&v=dQw4w9WgXcQ"
        assert extract_youtube_id(url) == VIDEO_ID

    def test_rightmost_marker_wins_over_query_v(self) -> None:
        url = "https://www.youtube.com/watch?v=aaaaaaaaaaa&list=PL1&v=dQw4w9WgXcQ"
        assert extract_youtube_id(url) == VIDEO_ID

    def test_invalid_rightmost_candidate_has_no_fallback(self) -> None:
        url = f"https://www.youtube.com/embed/{VIDEO_ID}?list=PL1&v=short"
        assert extract_youtube_id(url) is None

    @pytest.mark.parametrize(
        "url",
        [
            "",
            "https://www.youtube.com/",
            "https://www.youtube.com/shorts/dQw4w9WgXcQ",
            "https://www.instagram.com/p/Cxyz123/",
        ],
    )
    def test_unknown_shapes_are_absent(self, url: str) -> None:
        assert extract_youtube_id(url) is None

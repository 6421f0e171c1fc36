"""Tests for the HTTP surface (web/app.py).

The app is built around a service whose HttpClient is **mocked**, and
exercised through FastAPI's in-process test client.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from conftest import CONVERTER_URL, INSTAGRAM_URL, VIDEO_ID, WATCH_URL, build_service, fake_http, og_page
from fastapi.testclient import TestClient

from mediagrab.exceptions import UpstreamFetchError
from mediagrab.web import create_app

OEMBED = {"title": "Never Gonna Give You Up", "author_name": "Rick Astley"}
VIDEO_FILE = "https://scontent.cdninstagram.com/v/t50/clip.mp4"


def _client(http: MagicMock | None = None) -> TestClient:
    return TestClient(create_app(service=build_service(http or fake_http())))


class TestHealth:
    def test_api_test(self) -> None:
        response = _client().get("/api/test")
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Server is working!"}

    def test_cors_header(self) -> None:
        response = _client().get("/api/test", headers={"Origin": "https://app.example"})
        assert response.headers["access-control-allow-origin"] == "*"


class TestDetect:
    def test_youtube(self) -> None:
        response = _client().get("/api/detect", params={"url": WATCH_URL})
        assert response.json() == {"success": True, "platform": "youtube"}

    def test_missing_url(self) -> None:
        response = _client().get("/api/detect")
        assert response.status_code == 200
        assert response.json() == {"success": False, "error": "URL required"}

    def test_unsupported(self) -> None:
        response = _client().get("/api/detect", params={"url": "https://vimeo.com/1"})
        assert response.json()["error"] == "Unsupported platform"


class TestInfo:
    def test_youtube_info(self) -> None:
        response = _client(fake_http(json=OEMBED)).get(
            "/api/youtube/info",
            params={"url": WATCH_URL},
        )
        body = response.json()
        assert body["success"] is True
        assert body["videoId"] == VIDEO_ID
        assert body["channel"] == "Rick Astley"
        assert [f["quality"] for f in body["formats"]] == ["360p", "720p", "1080p"]
        assert body["audioFormats"] == [
            {"quality": "128kbps", "hasVideo": False, "hasAudio": True, "type": "mp3"},
        ]

    def test_youtube_info_upstream_failure(self) -> None:
        response = _client(fake_http(json=UpstreamFetchError("404 Client Error"))).get(
            "/api/youtube/info",
            params={"url": WATCH_URL},
        )
        assert response.status_code == 200
        assert response.json() == {"success": False, "error": "YouTube: 404 Client Error"}

    def test_instagram_video(self) -> None:
        http = fake_http(text=og_page({"og:video": VIDEO_FILE, "og:image": "thumb.jpg"}))
        body = _client(http).get("/api/instagram/info", params={"url": INSTAGRAM_URL}).json()
        assert body["success"] is True
        assert body["videoUrl"] == VIDEO_FILE
        assert body["formats"] == [
            {"quality": "HD", "url": VIDEO_FILE, "hasVideo": True, "hasAudio": True},
        ]
        assert "isImage" not in body

    def test_instagram_image(self) -> None:
        http = fake_http(text=og_page({"og:image": "photo.jpg"}))
        body = _client(http).get("/api/instagram/info", params={"url": INSTAGRAM_URL}).json()
        assert body["isImage"] is True
        assert body["imageUrl"] == "photo.jpg"
        assert "formats" not in body

    def test_instagram_info_missing_url(self) -> None:
        body = _client().get("/api/instagram/info").json()
        assert body == {"success": False, "error": "URL required"}


class TestDownload:
    def test_youtube_redirect(self) -> None:
        response = _client().get(
            "/api/youtube/download",
            params={"url": WATCH_URL, "quality": "720p"},
            follow_redirects=False,
        )
        assert response.status_code == 302
        assert response.headers["location"] == (
            f"{CONVERTER_URL}?url={WATCH_URL}&f=mp4&quality=720"
        )

    def test_youtube_default_quality(self) -> None:
        response = _client().get(
            "/api/youtube/download",
            params={"url": WATCH_URL},
            follow_redirects=False,
        )
        assert response.headers["location"].endswith("f=mp4&quality=360")

    def test_youtube_missing_url(self) -> None:
        response = _client().get("/api/youtube/download", follow_redirects=False)
        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "URL required"}

    def test_youtube_invalid_url(self) -> None:
        response = _client().get(
            "/api/youtube/download",
            params={"url": "https://www.youtube.com/watch?v=bad"},
            follow_redirects=False,
        )
        assert response.json() == {"success": False, "error": "Invalid YouTube URL"}

    def test_instagram_redirect(self) -> None:
        http = fake_http(text=og_page({"og:video": VIDEO_FILE}))
        response = _client(http).get(
            "/api/instagram/download",
            params={"url": INSTAGRAM_URL},
            follow_redirects=False,
        )
        assert response.status_code == 302
        assert response.headers["location"] == VIDEO_FILE

    @pytest.mark.parametrize(
        ("text", "error"),
        [
            (og_page({"og:image": "photo.jpg"}), "No video found"),
            (UpstreamFetchError("timed out"), "Instagram: timed out"),
        ],
    )
    def test_instagram_failure(self, text: str | Exception, error: str) -> None:
        response = _client(fake_http(text=text)).get(
            "/api/instagram/download",
            params={"url": INSTAGRAM_URL},
            follow_redirects=False,
        )
        assert response.status_code == 200
        assert response.json() == {"success": False, "error": error}

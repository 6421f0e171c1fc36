"""Domain models for mediagrab.

All models are **frozen** dataclasses — immutable value objects that
are built and returned within a single request and never stored.
Each result type knows how to render its JSON wire shape via
``to_dict()``; the transport layers serialise that dict verbatim.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------

class Platform(str, Enum):
    """Closed set of platforms a URL can be classified into."""

    YOUTUBE = "youtube"
    INSTAGRAM = "instagram"
    UNSUPPORTED = "unsupported"


# ---------------------------------------------------------------------------
# Format variant
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FormatVariant:
    """One downloadable rendition of a piece of media."""

    quality: str
    """Quality label shown to the user (``"720p"``, ``"128kbps"``, ``"HD"``)."""

    has_video: bool
    has_audio: bool

    type: str | None = None
    """Container extension (``mp4``, ``mp3``), when known."""

    url: str | None = None
    """Direct media URL, when the platform exposes one."""

    @property
    def is_audio_only(self) -> bool:
        return self.has_audio and not self.has_video

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"quality": self.quality}
        if self.url is not None:
            data["url"] = self.url
        data["hasVideo"] = self.has_video
        data["hasAudio"] = self.has_audio
        if self.type is not None:
            data["type"] = self.type
        return data


# ---------------------------------------------------------------------------
# Metadata result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MetadataResult:
    """Uniform output of every metadata fetch, successful or not.

    ``formats`` keeps catalog order: video-bearing variants first,
    audio-only variants after.  :meth:`to_dict` splits them into the
    ``formats`` and ``audioFormats`` keys of the wire shape.
    """

    success: bool
    title: str | None = None
    thumbnail: str | None = None
    channel: str | None = None
    video_id: str | None = None
    video_url: str | None = None
    image_url: str | None = None
    is_image: bool = False
    formats: tuple[FormatVariant, ...] = ()
    error: str | None = None

    @classmethod
    def failure(cls, error: str) -> MetadataResult:
        return cls(success=False, error=error)

    @property
    def video_formats(self) -> tuple[FormatVariant, ...]:
        return tuple(fmt for fmt in self.formats if not fmt.is_audio_only)

    @property
    def audio_formats(self) -> tuple[FormatVariant, ...]:
        return tuple(fmt for fmt in self.formats if fmt.is_audio_only)

    def to_dict(self) -> dict[str, Any]:
        """Render the JSON wire shape, omitting fields that are unset."""
        if not self.success:
            return {"success": False, "error": self.error or "Unknown error"}

        data: dict[str, Any] = {"success": True}
        optional: tuple[tuple[str, str | None], ...] = (
            ("title", self.title),
            ("thumbnail", self.thumbnail),
            ("channel", self.channel),
            ("videoId", self.video_id),
            ("videoUrl", self.video_url),
            ("imageUrl", self.image_url),
        )
        for key, value in optional:
            if value is not None:
                data[key] = value
        if self.is_image:
            data["isImage"] = True

        video = self.video_formats
        audio = self.audio_formats
        if video:
            data["formats"] = [fmt.to_dict() for fmt in video]
        if audio:
            data["audioFormats"] = [fmt.to_dict() for fmt in audio]
        return data


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DetectionResult:
    """Outcome of classifying a URL for the ``detect`` operation."""

    success: bool
    platform: Platform | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        if self.success and self.platform is not None:
            return {"success": True, "platform": self.platform.value}
        return {"success": False, "error": self.error or "Unknown error"}


# ---------------------------------------------------------------------------
# Download target
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DownloadTarget:
    """Where to send the caller for a download, or why we cannot.

    Exactly one of ``location`` and ``error`` is set.  ``status_code``
    is a hint for HTTP transports rendering the failure payload.
    """

    location: str | None = None
    error: str | None = None
    status_code: int = 200

    @classmethod
    def redirect(cls, location: str) -> DownloadTarget:
        return cls(location=location)

    @classmethod
    def failure(cls, error: str, *, status_code: int = 200) -> DownloadTarget:
        return cls(error=error, status_code=status_code)

    @property
    def is_redirect(self) -> bool:
        return self.location is not None

    def to_dict(self) -> dict[str, Any]:
        if self.location is not None:
            return {"success": True, "location": self.location}
        return {"success": False, "error": self.error or "Unknown error"}

"""Core / service layer — detection, extraction and normalisation.

Rules
-----
* No ``print()`` calls.
* No direct network I/O — outbound calls go through the
  :class:`~mediagrab.core.protocols.HttpClient` protocol.
* No imports from ``cli``, ``infra`` or ``web``.
* Public operations return structured results instead of raising.
"""

from mediagrab.core.download_resolver import DownloadResolver
from mediagrab.core.identifiers import extract_youtube_id
from mediagrab.core.instagram import InstagramFetcher
from mediagrab.core.metadata_service import MetadataService
from mediagrab.core.models import (
    DetectionResult,
    DownloadTarget,
    FormatVariant,
    MetadataResult,
    Platform,
)
from mediagrab.core.platform import detect_platform
from mediagrab.core.protocols import FormatProbe, HttpClient
from mediagrab.core.youtube import YouTubeFetcher

__all__: list[str] = [
    "DetectionResult",
    "DownloadResolver",
    "DownloadTarget",
    "FormatProbe",
    "FormatVariant",
    "HttpClient",
    "InstagramFetcher",
    "MetadataResult",
    "MetadataService",
    "Platform",
    "YouTubeFetcher",
    "detect_platform",
    "extract_youtube_id",
]

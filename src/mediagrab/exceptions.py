"""Custom exception hierarchy for mediagrab.

All exceptions that cross layer boundaries must inherit from
:class:`MediagrabError`.  Raw third-party exceptions (``requests``,
``yt_dlp``) must NEVER propagate beyond the infrastructure layer — they
are caught there and re-raised as a typed subclass defined here.

The core fetchers convert these into ``{success: false, error}``
results; only the CLI error boundary ever renders them directly.

Hierarchy
---------
MediagrabError
├── InputMissingError
├── UnsupportedPlatformError
├── InvalidIdentifierError
├── UpstreamFetchError
├── UpstreamParseError
├── ConfigurationError
└── EnvironmentError
"""

from __future__ import annotations


class MediagrabError(Exception):
    """Base exception for all mediagrab errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Input -----------------------------------------------------------------

class InputMissingError(MediagrabError):
    """Raised when a required URL is absent or blank."""


class UnsupportedPlatformError(MediagrabError):
    """Raised when a URL belongs to neither YouTube nor Instagram."""


class InvalidIdentifierError(MediagrabError):
    """Raised when a YouTube URL carries no recognisable video ID."""


# --- Upstream --------------------------------------------------------------

class UpstreamFetchError(MediagrabError):
    """Raised on network failure, timeout, or a non-2xx upstream response."""


class UpstreamParseError(MediagrabError):
    """Raised when an upstream response lacks the expected structure."""


# --- Environment / configuration -------------------------------------------

class ConfigurationError(MediagrabError):
    """Raised when an environment variable holds an unusable value."""


class EnvironmentError(MediagrabError):
    """Raised when a required runtime dependency is not available."""

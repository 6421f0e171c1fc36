"""Infrastructure layer — external system integration.

This layer wraps all interaction with ``requests`` and yt-dlp.  Every
raw third-party exception must be caught here and re-raised as a
:class:`~mediagrab.exceptions.MediagrabError` subclass.

Rules
-----
* No imports from ``cli`` or ``web``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from mediagrab.infra.http_client import RequestsHttpClient
from mediagrab.infra.ytdlp_probe import YtDlpFormatProbe

__all__: list[str] = [
    "RequestsHttpClient",
    "YtDlpFormatProbe",
]

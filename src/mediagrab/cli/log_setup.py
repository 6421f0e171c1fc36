"""Process-wide logging configuration for the CLI and the server.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed here, once, by the outermost layer.
"""

from __future__ import annotations

import logging

_NOISY_LOGGERS: dict[str, int] = {
    "urllib3": logging.WARNING,
    "requests": logging.WARNING,
    "yt_dlp": logging.WARNING,
}

_PLAIN_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _build_handler() -> logging.Handler:
    """Rich handler on stderr, or a plain stream handler without Rich."""
    try:
        from rich.logging import RichHandler
    except ModuleNotFoundError:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_PLAIN_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        return handler

    from mediagrab.cli.console import get_rich_console

    return RichHandler(
        console=get_rich_console(),
        show_path=False,
        rich_tracebacks=False,
    )


def configure_logging(level: str = "INFO") -> None:
    """Install a single handler on the root logger at *level*.

    Calling this again replaces the previously installed handler.
    """
    root = logging.getLogger()
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    root.setLevel(level.upper())
    root.addHandler(_build_handler())

    for name, noisy_level in _NOISY_LOGGERS.items():
        logging.getLogger(name).setLevel(noisy_level)

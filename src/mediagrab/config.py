"""Runtime settings sourced from environment variables.

:class:`Settings` is a frozen value object built once per process by
the CLI or the web bootstrap and handed down to the infrastructure
adapters.  The core layer never reads the environment itself.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from mediagrab.exceptions import ConfigurationError

DEFAULT_USER_AGENT: str = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)
DEFAULT_CONVERTER_URL: str = "https://loader.to/api/button/"
DEFAULT_TIMEOUT: float = 15.0
DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 3000
DEFAULT_LOG_LEVEL: str = "INFO"

_TRUE_VALUES: frozenset[str] = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES: frozenset[str] = frozenset({"0", "false", "no", "off", ""})
_LOG_LEVELS: frozenset[str] = frozenset(
    {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"},
)


@dataclass(frozen=True, slots=True)
class Settings:
    """Process-wide configuration."""

    http_timeout: float = DEFAULT_TIMEOUT
    """Seconds before an outbound request is abandoned."""

    user_agent: str = DEFAULT_USER_AGENT
    """Desktop-browser UA sent with Instagram page fetches."""

    converter_url: str = DEFAULT_CONVERTER_URL
    """Base URL of the external YouTube conversion service."""

    probe_formats: bool = False
    """Check the YouTube format catalog against yt-dlp before returning it."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from ``MEDIAGRAB_*`` variables.

        ``PORT`` is honoured as a fallback for ``MEDIAGRAB_PORT`` so the
        server runs unchanged on hosts that only inject ``PORT``.

        Raises
        ------
        ConfigurationError
            If any variable holds a value of the wrong shape.
        """
        env = os.environ if environ is None else environ

        timeout = _parse_float(env, "MEDIAGRAB_HTTP_TIMEOUT", DEFAULT_TIMEOUT)
        if timeout <= 0:
            raise ConfigurationError(
                f"MEDIAGRAB_HTTP_TIMEOUT must be positive, got {timeout}",
                hint="Use a number of seconds such as 15.",
            )

        port_raw = env.get("MEDIAGRAB_PORT") or env.get("PORT")
        port = _to_int("MEDIAGRAB_PORT", port_raw) if port_raw else DEFAULT_PORT

        log_level = env.get("MEDIAGRAB_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigurationError(
                f"Unknown log level: {log_level}",
                hint="MEDIAGRAB_LOG_LEVEL accepts " + ", ".join(sorted(_LOG_LEVELS)),
            )

        return cls(
            http_timeout=timeout,
            user_agent=env.get("MEDIAGRAB_USER_AGENT") or DEFAULT_USER_AGENT,
            converter_url=env.get("MEDIAGRAB_CONVERTER_URL") or DEFAULT_CONVERTER_URL,
            probe_formats=_parse_bool(env, "MEDIAGRAB_PROBE_FORMATS", False),
            host=env.get("MEDIAGRAB_HOST") or DEFAULT_HOST,
            port=port,
            log_level=log_level,
        )


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------

def _parse_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be a number, got {raw!r}",
        ) from exc


def _to_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}",
        ) from exc


def _parse_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"{name} must be a boolean, got {raw!r}",
        hint="Use one of: 1, 0, true, false, yes, no, on, off.",
    )

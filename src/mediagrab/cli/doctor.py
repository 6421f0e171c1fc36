"""``mediagrab doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment satisfies mediagrab's requirements.

This module lives in the CLI layer.  No business logic resides here;
it purely collects and displays diagnostic data.
"""

from __future__ import annotations

import importlib
import platform
import sys

from mediagrab.cli import exit_codes
from mediagrab.cli.console import console
from mediagrab.config import Settings
from mediagrab.exceptions import ConfigurationError
from mediagrab.version import __version__

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"
_FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 11)
    status = _OK if ok else "[red]FAIL (>=3.11 required)[/red]"
    return "Python", version, status


def _package_check(
    label: str,
    module_name: str,
    *,
    required: bool = True,
) -> tuple[str, str, str]:
    """Return (label, value, status) for an importable package.

    Missing optional packages are a WARN, missing required ones a FAIL.
    """
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return label, "NOT INSTALLED", _FAIL if required else _WARN
    version = getattr(module, "__version__", None) or "unknown"
    return label, str(version), _OK


def _ytdlp_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the yt-dlp row.

    yt-dlp only powers optional format probing, so absence is a WARN.
    """
    try:
        from yt_dlp.version import __version__ as ydl_ver

        return "yt-dlp", ydl_ver, _OK
    except ImportError:
        pass

    return _package_check("yt-dlp", "yt_dlp", required=False)


def _config_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the environment configuration."""
    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        return "config", str(exc), _FAIL
    probe = "probe on" if settings.probe_formats else "probe off"
    return "config", f"timeout {settings.http_timeout:g}s, {probe}", _OK


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, _OK


def _mediagrab_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the mediagrab version row."""
    return "mediagrab", __version__, _OK


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nmediagrab doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<16} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<16} {value:<32} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


def collect_checks() -> list[tuple[str, str, str]]:
    return [
        _mediagrab_version_check(),
        _python_version_check(),
        _package_check("requests", "requests"),
        _package_check("beautifulsoup4", "bs4"),
        _package_check("fastapi", "fastapi"),
        _package_check("uvicorn", "uvicorn"),
        _ytdlp_version_check(),
        _config_check(),
        _os_check(),
    ]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when no check fails,
        :data:`exit_codes.GENERAL_ERROR` otherwise.
    """
    checks = collect_checks()
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        message = "Some checks failed." if has_failure else "All checks passed."
        print(message, file=sys.stderr)
        return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS

    table = Table(
        title="mediagrab doctor",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("Component", style="bold", min_width=12)
    table.add_column("Value", min_width=20)
    table.add_column("Status", justify="center", min_width=8)
    for label, value, status in checks:
        table.add_row(label, value, status)

    console.print()
    console.print(table)
    console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR
    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS

"""CLI application entry point and command routing for mediagrab.

This module is the **sole error boundary** for the CLI.  It catches
:class:`~mediagrab.exceptions.MediagrabError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, rendering user-friendly messages via
Rich and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core
  service assembled by :mod:`mediagrab.bootstrap`.
* This module is the only place that translates between the domain world
  and the OS process exit code.
"""

from __future__ import annotations

import argparse
import sys

from mediagrab.cli import exit_codes
from mediagrab.cli.console import console
from mediagrab.config import Settings
from mediagrab.exceptions import MediagrabError
from mediagrab.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    The CLI supports:
    * ``mediagrab <url>``   — show metadata and resolve a download link
    * ``mediagrab serve``   — run the HTTP API
    * ``mediagrab doctor``  — environment diagnostics
    * ``mediagrab --version``
    """
    parser = argparse.ArgumentParser(
        prog="mediagrab",
        description="Media metadata and download links for YouTube and Instagram.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="YouTube or Instagram URL, 'serve' to run the API, or 'doctor'.",
    )
    parser.add_argument(
        "-q",
        "--quality",
        default=None,
        help="Download quality (360p, 720p, 1080p, audio); skips the prompt.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="as_json",
        help="Print the metadata as JSON on stdout and exit.",
    )
    parser.add_argument("--host", default=None, help="Bind address for 'serve'.")
    parser.add_argument("--port", type=int, default=None, help="Port for 'serve'.")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_fetch(
    url: str,
    settings: Settings,
    *,
    quality: str | None = None,
    as_json: bool = False,
) -> int:
    """Fetch metadata for *url* and resolve a download link.

    Flow:
    1. Assemble the metadata service.
    2. Detect the platform and fetch metadata.
    3. Print JSON and stop, or render the metadata.
    4. Pick a format (``--quality`` or interactive prompt).
    5. Print the direct URL or the converter redirect.
    """
    from mediagrab.bootstrap import build_metadata_service
    from mediagrab.cli.format_prompt import (
        display_metadata,
        download_quality,
        prompt_variant_selection,
    )

    service = build_metadata_service(settings)

    if not as_json:
        console.print(f"\n[bold]Fetching metadata…[/bold]  {url}\n")
    result = service.fetch(url)

    if as_json:
        console.print_json(result.to_dict())
        return exit_codes.SUCCESS if result.success else exit_codes.GENERAL_ERROR

    if not result.success:
        console.print(f"[bold red]Error:[/bold red] {result.error}")
        return exit_codes.GENERAL_ERROR

    display_metadata(result)
    if result.is_image:
        console.print("[yellow]Image post — no video to download.[/yellow]")
        return exit_codes.SUCCESS

    if quality is None:
        variant = prompt_variant_selection(result.formats)
        if variant.url:
            console.print(f"[bold green]Download:[/bold green] {variant.url}")
            return exit_codes.SUCCESS
        quality = download_quality(variant)

    platform = service.detect(url).platform
    target = service.resolve_download(platform or "unsupported", url, quality)
    if target.location is None:
        console.print(f"[bold red]Error:[/bold red] {target.error}")
        return exit_codes.GENERAL_ERROR

    console.print(f"[bold green]Download:[/bold green] {target.location}")
    return exit_codes.SUCCESS


def _handle_serve(settings: Settings, *, host: str | None, port: int | None) -> int:
    """Run the HTTP API under uvicorn until interrupted."""
    import uvicorn

    from mediagrab.web.app import create_app

    bind_host = host or settings.host
    bind_port = port or settings.port
    console.print(f"[bold green]Server running on[/bold green] http://{bind_host}:{bind_port}")
    uvicorn.run(
        create_app(settings=settings),
        host=bind_host,
        port=bind_port,
        log_config=None,
    )
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    """Dispatch the ``doctor`` diagnostics command."""
    from mediagrab.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the mediagrab CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.  Accepting *argv* enables deterministic testing without
        monkeypatching.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.target is None:
        parser.print_help()
        return exit_codes.SUCCESS

    target: str = args.target

    if target.lower() == "doctor":
        return _handle_doctor()

    from mediagrab.cli.log_setup import configure_logging

    settings = Settings.from_env()
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    if target.lower() == "serve":
        return _handle_serve(settings, host=args.host, port=args.port)

    return _handle_fetch(
        target,
        settings,
        quality=args.quality,
        as_json=args.as_json,
    )


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except MediagrabError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)

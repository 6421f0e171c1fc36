"""CLI console helpers with optional Rich support.

Human-facing output goes to stderr; machine-readable JSON (``--json``)
goes to stdout so it can be piped.  Rich is imported lazily so that
``--help``, ``--version`` and ``--json`` keep working without it.
"""

from __future__ import annotations

import json
import sys
from typing import Any

from mediagrab.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance, targeting stderr by default."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def print(self, *objects: object) -> None:
        """Render to stderr with Rich when available, else plain print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(*objects, file=sys.stderr)
            return
        rich_console.print(*objects)

    def print_json(self, data: dict[str, Any]) -> None:
        """Write *data* as JSON to stdout; never colourised."""
        sys.stdout.write(json.dumps(data, indent=2, ensure_ascii=False) + "\n")


console = _ConsoleProxy()

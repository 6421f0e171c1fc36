"""Allow ``python -m mediagrab`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m mediagrab`` behaves identically to the ``mediagrab``
console script.
"""

from __future__ import annotations

from mediagrab.cli.app import cli

if __name__ == "__main__":
    cli()

"""Interactive quality selection UI for the CLI layer.

This module is responsible for:

* Rendering the fetched metadata and a Rich table of format variants.
* Prompting the user to pick a variant via questionary arrow keys.
* Returning the download quality key understood by the resolver.

All display-related logic lives here — no business logic, no network
calls, no redirect building.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mediagrab.cli.console import console
from mediagrab.core.models import FormatVariant, MetadataResult
from mediagrab.exceptions import EnvironmentError

AUDIO_QUALITY: str = "audio"


def _import_questionary() -> Any:
    """Import questionary lazily for interactive selection."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
        ) from exc
    return questionary


def _import_rich_table() -> type[Any]:
    """Import rich table lazily for variant rendering."""
    try:
        from rich.table import Table
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Table


# ---------------------------------------------------------------------------
# Presentation helpers (pure transforms — no I/O themselves)
# ---------------------------------------------------------------------------

def _yes_no(flag: bool) -> str:
    return "yes" if flag else "—"


def _format_container(variant: FormatVariant) -> str:
    return variant.type or "—"


def download_quality(variant: FormatVariant) -> str:
    """Map a variant to the quality key the download resolver accepts.

    Audio-only variants map to ``"audio"``; video variants use their
    label (``"720p"``).
    """
    if variant.is_audio_only:
        return AUDIO_QUALITY
    return variant.quality


def _build_choice_label(index: int, variant: FormatVariant) -> str:
    """Build the single-line label shown in the questionary selector.

    Format: ``"  1.  720p       video+audio   mp4"``
    """
    if variant.has_video and variant.has_audio:
        kind = "video+audio"
    elif variant.has_video:
        kind = "video"
    else:
        kind = "audio"
    return f"  {index + 1}.  {variant.quality:<10} {kind:<12}  {_format_container(variant)}"


# ---------------------------------------------------------------------------
# Rich display
# ---------------------------------------------------------------------------

def display_metadata(result: MetadataResult) -> None:
    """Print title, channel and thumbnail, then the variant table."""
    console.print()
    console.print(f"[bold cyan]Title:[/bold cyan]     {result.title}")
    if result.channel:
        console.print(f"[bold cyan]Channel:[/bold cyan]   {result.channel}")
    if result.thumbnail:
        console.print(f"[bold cyan]Thumbnail:[/bold cyan] {result.thumbnail}")
    if result.is_image and result.image_url:
        console.print(f"[bold cyan]Image:[/bold cyan]     {result.image_url}")
    console.print()

    if result.formats:
        _display_variant_table(result.formats)


def _display_variant_table(variants: Sequence[FormatVariant]) -> None:
    table_class = _import_rich_table()

    table = table_class(
        title="Available Formats",
        show_header=True,
        header_style="bold magenta",
        border_style="dim",
    )
    table.add_column("#", justify="right", style="dim", width=4)
    table.add_column("Quality", justify="left", min_width=8)
    table.add_column("Video", justify="center", min_width=5)
    table.add_column("Audio", justify="center", min_width=5)
    table.add_column("Container", justify="left", min_width=8)

    for i, variant in enumerate(variants, start=1):
        table.add_row(
            str(i),
            variant.quality,
            _yes_no(variant.has_video),
            _yes_no(variant.has_audio),
            _format_container(variant),
        )

    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Public prompt function
# ---------------------------------------------------------------------------

def prompt_variant_selection(variants: Sequence[FormatVariant]) -> FormatVariant:
    """Prompt the user to pick one of *variants*.

    A single variant is returned without prompting.

    Raises
    ------
    KeyboardInterrupt
        If the user presses Ctrl+C during selection.
    InputMissingError
        If the user cancels the prompt (Esc / None return) or there is
        nothing to choose from.
    """
    from mediagrab.exceptions import InputMissingError

    if not variants:
        raise InputMissingError("No downloadable formats for this URL.")
    if len(variants) == 1:
        return variants[0]

    questionary = _import_questionary()

    choices = [
        questionary.Choice(title=_build_choice_label(i, variant), value=i)
        for i, variant in enumerate(variants)
    ]

    selected: int | None = questionary.select(
        "Select format to download:",
        choices=choices,
        use_arrow_keys=True,
        use_shortcuts=False,
    ).ask()  # Returns None on Ctrl+C / Esc

    if selected is None:
        raise InputMissingError(
            "No format selected.",
            hint="Use arrow keys to pick a format, then press Enter.",
        )

    return variants[selected]

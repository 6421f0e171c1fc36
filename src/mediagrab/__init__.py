"""mediagrab — media metadata extraction for YouTube and Instagram.

Detects the platform of a page URL, fetches oEmbed / Open Graph metadata
and resolves download redirects, behind a CLI and a small HTTP surface.
"""

from mediagrab.version import __version__

__all__: list[str] = ["__version__"]

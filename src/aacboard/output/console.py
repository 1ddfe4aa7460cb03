"""Rich Console factory and theme for aacboard output.

Consoles render into a StringIO buffer so renderers keep a
``-> str`` contract.  Rich drops colour codes when not on a TTY.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

AAC_THEME = Theme(
    {
        "aac.ok": "bold green",
        "aac.error": "bold red",
        "aac.warning": "bold yellow",
        "aac.op": "bold cyan",
        "aac.key": "dim",
        "aac.id": "bold blue",
        "aac.title": "bold",
        "aac.temporary": "italic yellow",
        "aac.score": "magenta",
        "aac.source.library": "green",
        "aac.source.external": "blue",
        "aac.source.fallback": "yellow",
    }
)

_SOURCE_STYLES: dict[str, str] = {
    "library": "aac.source.library",
    "external": "aac.source.external",
    "fallback": "aac.source.fallback",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=AAC_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_source(source: str) -> str:
    """Rich style name for an interpretation source."""
    return _SOURCE_STYLES.get(source, "")

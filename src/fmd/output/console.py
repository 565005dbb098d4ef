"""Rich theme and off-screen rendering for fmd's stderr messages.

Text is rendered into a StringIO-backed Console and returned as a string;
the caller writes it to stderr. Rich drops color codes when the target is
not a terminal, which covers pipes and tests.
"""

from __future__ import annotations

from collections.abc import Iterable
from io import StringIO

from rich.console import Console, RenderableType
from rich.theme import Theme

FMD_THEME = Theme(
    {
        "fmd.error": "bold red",
        "fmd.warning": "bold yellow",
        "fmd.count": "bold cyan",
        "fmd.skipped": "yellow",
        "fmd.dim": "dim",
    }
)

DEFAULT_WIDTH = 120


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """A Console writing to an in-memory buffer."""
    return Console(
        file=StringIO(),
        theme=FMD_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Text rendered so far by a :func:`create_console` Console."""
    buffer = console.file
    if not isinstance(buffer, StringIO):
        raise TypeError("console was not created by create_console()")
    return buffer.getvalue()


def render_lines(lines: Iterable[RenderableType]) -> str:
    """Render each item on exactly one line; no trailing newline."""
    console = create_console()
    for line in lines:
        console.print(line, soft_wrap=True)
    return get_output(console).rstrip("\n")

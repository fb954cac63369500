"""Rich Console factory and theme for chainvertex output.

Consoles render to a StringIO buffer, preserving the
``format_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CV_THEME = Theme(
    {
        "cv.ok": "bold green",
        "cv.error": "bold red",
        "cv.warning": "bold yellow",
        "cv.op": "bold cyan",
        "cv.key": "dim",
        "cv.id": "bold blue",
        "cv.owner": "magenta",
        "cv.data": "bold",
        "cv.live": "green",
        "cv.dead": "dim red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=CV_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_liveness(live: bool) -> str:
    return "cv.live" if live else "cv.dead"

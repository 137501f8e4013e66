"""Rich Console factory and theme for haccpctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

HACCP_THEME = Theme(
    {
        "haccp.ok": "bold green",
        "haccp.error": "bold red",
        "haccp.warning": "bold yellow",
        "haccp.op": "bold cyan",
        "haccp.key": "dim",
        "haccp.score": "magenta",
        "haccp.class.fail": "bold red",
        "haccp.class.setup": "bold blue",
        "haccp.class.warn": "bold yellow",
        "haccp.class.ok": "bold green",
    }
)

_CLASSIFICATION_STYLES: dict[str, str] = {
    "fail": "haccp.class.fail",
    "setup": "haccp.class.setup",
    "warn": "haccp.class.warn",
    "ok": "haccp.class.ok",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=HACCP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_classification(classification: str) -> str:
    return _CLASSIFICATION_STYLES.get(classification, "")

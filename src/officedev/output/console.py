"""Rich Console factory and theme.

Consoles render into a StringIO buffer so formatters return plain strings.
In non-TTY environments (tests, pipes) Rich drops color codes itself.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

OFFICE_THEME = Theme(
    {
        "office.ok": "bold green",
        "office.error": "bold red",
        "office.warning": "bold yellow",
        "office.op": "bold cyan",
        "office.key": "dim",
        "office.name": "bold blue",
        "office.cap.print": "green",
        "office.cap.scan": "blue",
        "office.cap.fax": "magenta",
    }
)


def create_console(*, width: int | None = None) -> Console:
    return Console(file=StringIO(), theme=OFFICE_THEME, highlight=False, width=width or 120)


def get_output(console: Console) -> str:
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def capability_markup(capabilities: list[str]) -> str:
    """``["print", "scan"]`` -> styled, comma-separated markup."""
    if not capabilities:
        return "[office.key]none[/]"
    return ", ".join(f"[office.cap.{c}]{c}[/]" for c in capabilities)

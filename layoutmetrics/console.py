"""Console status output built on rich.

Status lines go to stderr so that stdout carries only the JSON report.
"""

from enum import IntEnum
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

INDENT = "  "

_STATUS_STYLES = {
    "info": ("INFO", "cyan"),
    "success": ("DONE", "bold green"),
    "warning": ("WARNING", "yellow"),
    "error": ("ERROR", "bold red"),
    "debug": ("DEBUG", "dim"),
}

_console: Optional[Console] = None


class Verbosity(IntEnum):
    BRIEF = 0
    VERBOSE = 1
    DEBUG = 2

    @classmethod
    def from_count(cls, count: int) -> "Verbosity":
        # -v for VERBOSE, -vv (or more) for DEBUG
        return cls(min(max(count, 0), cls.DEBUG))


def get_console() -> Console:
    global _console
    if _console is None:
        _console = Console(stderr=True, highlight=False)
    return _console


def fmt_count(n: int) -> str:
    return f"[bold]{n:,}[/bold]"


def emit(text: str = "", console: Optional[Console] = None) -> None:
    (console or get_console()).print(text)


class StatusIndicator:
    """Builder for a single status line plus indented detail items."""

    def __init__(self, kind: str):
        if kind not in _STATUS_STYLES:
            raise ValueError(f"unknown status kind: {kind}")
        self.kind = kind
        self._messages: List[str] = []
        self._items: List[str] = []

    def add_message(self, message: str) -> "StatusIndicator":
        self._messages.append(message)
        return self

    def add_file(self, path: str) -> "StatusIndicator":
        self._messages.append(f"[bold]{escape(str(path))}[/bold]")
        return self

    def add_item(self, item: str, indent_level: int = 1) -> "StatusIndicator":
        self._items.append(f"{INDENT * (indent_level + 1)}{item}")
        return self

    def build(self) -> str:
        label, style = _STATUS_STYLES[self.kind]
        head = f"[{style}]\\[{label}][/{style}] " + " ".join(self._messages)
        return "\n".join([head] + self._items)

    def emit(self, console: Optional[Console] = None) -> None:
        emit(self.build(), console=console)

"""Console output abstraction.

Services never log through a global logger. They receive a ConsoleProtocol
implementation: RichConsole in the CLI, MockConsole in tests. Grouped
output (one group per generated package) is expressed with ``group()``.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    BOLD = auto()
    HEADER = auto()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def debug(self, message: str) -> None:
        """Print a diagnostic message, only when the console is verbose."""
        ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def newline(self) -> None: ...

    def group(self, title: str) -> AbstractContextManager[None]:
        """Print ``title`` and indent everything printed inside the block."""
        ...


class RichConsole:
    """Console implementation using Rich library."""

    def __init__(self, *, verbose: bool = False, stderr: bool = False) -> None:
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)
        self._verbose = verbose
        self._indent = 0
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.BOLD: "bold",
            Style.HEADER: "blue bold",
        }

    @property
    def verbose(self) -> bool:
        return self._verbose

    def _emit(self, message: str, style: str = "") -> None:
        from rich.padding import Padding
        from rich.text import Text

        text = Text.from_markup(message, style=style)
        if self._indent:
            self._console.print(Padding(text, (0, 0, 0, self._indent * 2)))
        else:
            self._console.print(text)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        from rich.markup import escape

        self._emit(escape(message), self._style_map.get(style, ""))

    def debug(self, message: str) -> None:
        if self._verbose:
            self.print(message, Style.DIM)

    def success(self, message: str) -> None:
        from rich.markup import escape

        self._emit(f"[green]OK[/green] {escape(message)}")

    def error(self, message: str) -> None:
        from rich.markup import escape

        self._emit(f"[red bold]error:[/red bold] {escape(message)}")

    def warning(self, message: str) -> None:
        from rich.markup import escape

        self._emit(f"[yellow]warning:[/yellow] {escape(message)}")

    def info(self, message: str) -> None:
        from rich.markup import escape

        self._emit(f"[cyan]info:[/cyan] {escape(message)}")

    def header(self, message: str) -> None:
        self._console.print()
        self.print(message, Style.HEADER)

    def newline(self) -> None:
        self._console.print()

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        self.print(title, Style.BOLD)
        self._indent += 1
        try:
            yield
        finally:
            self._indent -= 1


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style
    depth: int = 0


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing.

    Debug messages are always recorded; ``verbose`` only mirrors the flag a
    real console would have been built with.
    """

    verbose: bool = False
    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)
    depth: int = 0

    def _record(self, message: str, style: Style) -> None:
        self.outputs.append(OutputRecord(message, style, self.depth))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._record(message, style)

    def debug(self, message: str) -> None:
        self._record(message, Style.DIM)

    def success(self, message: str) -> None:
        self._record(f"OK {message}", Style.SUCCESS)

    def error(self, message: str) -> None:
        self._record(f"error: {message}", Style.ERROR)

    def warning(self, message: str) -> None:
        self._record(f"warning: {message}", Style.WARNING)

    def info(self, message: str) -> None:
        self._record(f"info: {message}", Style.INFO)

    def header(self, message: str) -> None:
        self._record(message, Style.HEADER)

    def newline(self) -> None:
        self._record("", Style.DEFAULT)

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        self._record(title, Style.BOLD)
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    # Test helper methods

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_success(self) -> bool:
        return any(o.style == Style.SUCCESS for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        """Find all outputs containing a substring."""
        return [o for o in self.outputs if substring in o.message]

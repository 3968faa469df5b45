"""User-facing output for CLI commands.

Commands never print directly; they receive an :class:`OutputSink` so that
styling, quiet mode and tests can swap the destination.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rich.console import Console
from rich.markup import escape


class OutputSink(ABC):
    """Destination for progress and result messages."""

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def success(self, message: str) -> None:
        pass

    @abstractmethod
    def warning(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass


class ConsoleOutput(OutputSink):
    """Rich console output with the classic SpringWell markers."""

    def __init__(self, console: Console | None = None, quiet: bool = False):
        """
        Initialize console output.

        Args:
            console: Rich console instance (creates new if None)
            quiet: Suppress everything except errors
        """
        self.console = console or Console()
        self.quiet = quiet

    def info(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"[cyan]{escape(message)}[/cyan]")

    def success(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"[green]✓ {escape(message)}[/green]")

    def warning(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"[yellow]! {escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗ {escape(message)}[/red]")


class RecordingOutput(OutputSink):
    """Collects messages in memory, used by tests and scripted callers."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def of_level(self, level: str) -> list[str]:
        """Return the messages recorded at ``level``."""
        return [text for lvl, text in self.messages if lvl == level]

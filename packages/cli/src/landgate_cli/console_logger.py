"""Render checker diagnostics on the terminal."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape

from landgate_core.logger import CheckLogger


class ConsoleLogger(CheckLogger):
    """Prints info lines plainly and warnings in yellow.

    Messages are escaped: reviewer names and URLs may contain square brackets
    that rich would otherwise read as markup.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def info(self, message: str) -> None:
        self.console.print(f"  [dim]·[/dim] {escape(message)}", soft_wrap=True)

    def warn(self, message: str) -> None:
        self.console.print(f"  [yellow]⚠ {escape(message)}[/yellow]", soft_wrap=True)

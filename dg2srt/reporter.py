"""Colored console progress lines using Rich."""

import logging
from typing import Optional

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)

class ConsoleReporter:
    """Prints user-facing progress and mirrors it to the log."""

    def __init__(self, console: Optional[Console] = None, error_console: Optional[Console] = None):
        self.console = console or Console(highlight=False)
        self.error_console = error_console or Console(stderr=True, highlight=False)

    def directory(self, relative_dir: str) -> None:
        self.console.print(f"[cyan]📁 {escape(relative_dir)}[/cyan]")

    def converted(self, source_name: str, output_name: str) -> None:
        self.console.print(f"  [green]→[/green] {escape(source_name)} → {escape(output_name)}")

    def warning(self, message: str) -> None:
        logger.warning(message)
        self.console.print(f"[yellow]{escape(message)}[/yellow]")

    def file_warning(self, file_name: str, message: str) -> None:
        logger.warning(f"{file_name}: {message}")
        self.error_console.print(f"  [yellow]⚠[/yellow] Skipping {escape(file_name)}: {escape(message)}")

    def file_error(self, file_name: str, message: str) -> None:
        logger.error(f"{file_name}: {message}")
        self.error_console.print(f"  [red]✗[/red] Error processing {escape(file_name)}: {escape(message)}")

    def fatal(self, message: str) -> None:
        self.error_console.print(f"[red]Error: {escape(message)}[/red]")

    def success(self, message: str) -> None:
        logger.info(message)
        self.console.print(f"[green]✅ {escape(message)}[/green]")

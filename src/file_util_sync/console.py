"""Console output for the command-line interface."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from file_util_sync.config import FileUtilSettings
    from file_util_sync.types import FileDescriptor


class ConsoleUI:
    """Non-interactive console output for file-util-sync."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize console output.

        Args:
            console: Rich console to print to. A new one is created if omitted.
        """
        self.console = console or Console()

    def show_descriptors(self, descriptors: list[FileDescriptor], directory: str) -> None:
        """Display a table of file descriptors.

        Args:
            descriptors: Files found by a traversal.
            directory: Root directory, used for the title.
        """
        if not descriptors:
            self.show_warning(f"No files found in {directory}")
            return

        table = Table(title=f"Files in {directory}")
        table.add_column("Path", style="cyan")
        table.add_column("Size", justify="right")
        table.add_column("Read-only")

        for descriptor in descriptors:
            table.add_row(
                str(descriptor.path),
                str(descriptor.size),
                "yes" if descriptor.read_only else "",
            )

        self.console.print(table)
        self.console.print(f"{len(descriptors)} file(s)")

    def show_paths(self, paths: list[Path]) -> None:
        """Display one path per line."""
        for path in paths:
            self.console.print(str(path), highlight=False)
        self.console.print(f"{len(paths)} file(s)")

    def show_settings(self, settings: FileUtilSettings, config_path: Path) -> None:
        """Display the active settings."""
        self.console.print("\n[bold]Configuration[/bold]")
        self.console.print(f"  Config file: {config_path}")
        self.console.print(f"  Encoding: {settings.encoding}")
        workers = settings.max_workers if settings.max_workers is not None else "default"
        self.console.print(f"  Max workers: {workers}")
        self.console.print(f"  Log level: {settings.log_level}")

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]\u2713[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]\u2717[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message."""
        self.console.print(f"[yellow]![/yellow] {message}")

"""CLI commands using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from file_util_sync.context import AppContext

import typer
from rich.console import Console
from rich.logging import RichHandler

from file_util_sync import __version__
from file_util_sync.config import ConfigError, default_config_path
from file_util_sync.console import ConsoleUI
from file_util_sync.context import create_context
from file_util_sync.filesystem import FileUtilSync

app = typer.Typer(
    name="file-util-sync",
    help="Synchronous file and directory utilities",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Configuration commands")

app.add_typer(config_app, name="config")

console = Console()
ui = ConsoleUI(console)

# Global flags set by the main callback
_state = {"verbose": False, "quiet": False}


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"file-util-sync v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Show debug log output")
    ] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", "-q", help="Suppress operation logging")
    ] = False,
) -> None:
    """Synchronous file and directory utilities."""
    _state["verbose"] = verbose
    _state["quiet"] = quiet


def configure_logging(level: str | int) -> None:
    """Route log records to the console through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _load_context() -> AppContext:
    """Create the application context and configure logging from it."""
    try:
        ctx = create_context()
    except ConfigError as e:
        ui.show_error(str(e))
        raise typer.Exit(1) from e

    configure_logging(logging.DEBUG if _state["verbose"] else ctx.settings.log_level)
    return ctx


def _log_enabled() -> bool:
    return not _state["quiet"]


# ============================================================================
# Listing
# ============================================================================


@app.command("ls")
def list_files(
    directory: Annotated[Path, typer.Argument(help="Directory to list")],
    strict: Annotated[
        bool, typer.Option("--strict", help="Fail on unreadable directories")
    ] = False,
    _context=None,
) -> None:
    """List every file under a directory."""
    ctx = _context or _load_context()

    if strict:
        try:
            paths = ctx.file_util.list_files_recursively(directory, log=_log_enabled())
        except OSError as e:
            ui.show_error(f"Failed to list {directory}: {e}")
            raise typer.Exit(1) from e
        ui.show_paths(paths)
        return

    descriptors = ctx.file_util.list_file_descriptors_recursively_safe(
        directory, log=_log_enabled()
    )
    ui.show_descriptors(descriptors, str(directory))


@app.command("size")
def size(
    path: Annotated[Path, typer.Argument(help="File to measure")],
    _context=None,
) -> None:
    """Show the size of a file in bytes."""
    ctx = _context or _load_context()

    try:
        file_size = ctx.file_util.get_file_size(path, log=_log_enabled())
    except OSError as e:
        ui.show_error(f"Failed to get size of {path}: {e}")
        raise typer.Exit(1) from e

    console.print(f"{file_size}")


@app.command("temp-name")
def temp_name() -> None:
    """Print a unique temporary file path (the file is not created)."""
    console.print(str(FileUtilSync.get_temp_file_name()), highlight=False)


# ============================================================================
# Copy / Rename
# ============================================================================


@app.command("copy-tree")
def copy_tree(
    source: Annotated[Path, typer.Argument(help="Directory to copy")],
    destination: Annotated[Path, typer.Argument(help="Destination directory")],
    overwrite: Annotated[
        bool, typer.Option("--overwrite/--no-overwrite", help="Replace existing files")
    ] = True,
    _context=None,
) -> None:
    """Copy a directory tree, including empty directories."""
    ctx = _context or _load_context()

    try:
        ctx.file_util.copy_directory_recursively(
            source, destination, overwrite=overwrite, log=_log_enabled()
        )
    except OSError as e:
        ui.show_error(f"Failed to copy {source}: {e}")
        raise typer.Exit(1) from e

    ui.show_success(f"Copied {source} to {destination}")


@app.command("copy-files")
def copy_files(
    source: Annotated[Path, typer.Argument(help="Directory whose files are copied")],
    destination: Annotated[Path, typer.Argument(help="Destination directory")],
    overwrite: Annotated[
        bool, typer.Option("--overwrite/--no-overwrite", help="Replace existing files")
    ] = True,
    _context=None,
) -> None:
    """Copy the files directly inside a directory."""
    ctx = _context or _load_context()

    try:
        ctx.file_util.copy_top_level_files(
            source, destination, overwrite=overwrite, log=_log_enabled()
        )
    except OSError as e:
        ui.show_error(f"Failed to copy files from {source}: {e}")
        raise typer.Exit(1) from e

    ui.show_success(f"Copied files from {source} to {destination}")


@app.command("rename-all")
def rename_all(
    directory: Annotated[Path, typer.Argument(help="Directory to rename files in")],
    old_value: Annotated[str, typer.Argument(help="Text to replace")],
    new_value: Annotated[str, typer.Argument(help="Replacement text")],
    _context=None,
) -> None:
    """Rename every file under a directory by substring replacement."""
    ctx = _context or _load_context()

    try:
        ctx.file_util.rename_all_recursively(
            directory, old_value, new_value, log=_log_enabled()
        )
    except OSError as e:
        ui.show_error(f"Failed to rename files in {directory}: {e}")
        raise typer.Exit(1) from e

    ui.show_success(f"Renamed '{old_value}' to '{new_value}' in {directory}")


# ============================================================================
# Delete / Attributes
# ============================================================================


@app.command("delete-all")
def delete_all(
    directory: Annotated[Path, typer.Argument(help="Directory to empty")],
    best_effort: Annotated[
        bool, typer.Option("--try", help="Keep going when a file cannot be deleted")
    ] = False,
    _context=None,
) -> None:
    """Delete every file under a directory. Directories are kept."""
    ctx = _context or _load_context()

    if best_effort:
        ctx.file_util.try_delete_all_safe(directory, log=_log_enabled())
        ui.show_success(f"Deleted files in {directory} (best effort)")
        return

    try:
        ctx.file_util.delete_all_safe(directory, log=_log_enabled())
    except OSError as e:
        ui.show_error(f"Failed to delete files in {directory}: {e}")
        raise typer.Exit(1) from e

    ui.show_success(f"Deleted all files in {directory}")


@app.command("clear-attributes")
def clear_attributes(
    directory: Annotated[Path, typer.Argument(help="Directory to process")],
    _context=None,
) -> None:
    """Clear read-only and archive attributes on every file under a directory."""
    ctx = _context or _load_context()

    ctx.file_util.remove_read_only_and_archive_attributes_from_all(
        directory, log=_log_enabled()
    )
    ui.show_success(f"Cleared attributes in {directory}")


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    _context=None,
) -> None:
    """Show current configuration."""
    ctx = _context or _load_context()
    ui.show_settings(ctx.settings, ctx.config_path or default_config_path())


if __name__ == "__main__":
    app()

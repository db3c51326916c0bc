"""Protocol definitions for core abstractions.

This module defines abstract interfaces (Protocols) for the file utility
and its collaborators. Callers should type against these so test doubles
can be injected without inheritance.

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from pathlib import Path
from typing import IO, TYPE_CHECKING, Iterable, Protocol, runtime_checkable

from file_util_sync.types import StrPath

if TYPE_CHECKING:
    from file_util_sync.types import FileDescriptor, OperationResult


@runtime_checkable
class DirectoryHelper(Protocol):
    """Protocol for directory creation.

    Implementations create a directory (with its ancestors) when missing.
    """

    def ensure_directory_exists(self, path: StrPath, *, log: bool = True) -> bool:
        """Create a directory if it does not exist.

        Args:
            path: Directory to create.
            log: Emit log records.

        Returns:
            True if the directory was created, False if it already existed.
        """
        ...


@runtime_checkable
class FileOps(Protocol):
    """Protocol for synchronous file operations.

    Strict operations raise the underlying ``OSError``. Try-prefixed
    operations log failures and return an ``OperationResult`` instead.
    """

    def read(self, path: StrPath, *, log: bool = True) -> str:
        """Read a whole file as text.

        Raises:
            FileNotFoundError: If file does not exist.
        """
        ...

    def read_bytes(self, path: StrPath, *, log: bool = True) -> bytes:
        """Read a whole file as bytes."""
        ...

    def read_lines(self, path: StrPath, *, log: bool = True) -> list[str]:
        """Read a file as a list of lines without terminators."""
        ...

    def write(self, path: StrPath, content: str, *, log: bool = True) -> None:
        """Create or truncate a file and write text to it."""
        ...

    def write_lines(self, path: StrPath, lines: Iterable[str], *, log: bool = True) -> None:
        """Write each line followed by a line terminator."""
        ...

    def write_bytes(self, path: StrPath, data: bytes, *, log: bool = True) -> None:
        """Create or truncate a file and write bytes to it."""
        ...

    def write_from_stream(self, path: StrPath, stream: IO[bytes], *, log: bool = True) -> None:
        """Rewind a stream and copy its content into a file.

        The stream is left open.
        """
        ...

    def exists(self, path: StrPath, *, log: bool = True) -> bool:
        """Check if a file exists."""
        ...

    def delete(self, path: StrPath, *, log: bool = True) -> None:
        """Delete a file, failing if it is missing."""
        ...

    def delete_if_exists(self, path: StrPath, *, log: bool = True) -> bool:
        """Delete a file if present.

        Returns:
            True if a file was deleted, False if none existed.
        """
        ...

    def try_delete(self, path: StrPath, *, log: bool = True) -> OperationResult:
        """Delete a file, never raising."""
        ...

    def try_delete_if_exists(self, path: StrPath, *, log: bool = True) -> OperationResult:
        """Delete a file if present, never raising."""
        ...

    def move(self, source: StrPath, target: StrPath, *, log: bool = True) -> None:
        """Move a file. Moving a path onto itself is a no-op."""
        ...

    def copy(
        self, source: StrPath, target: StrPath, *, overwrite: bool = False, log: bool = True
    ) -> None:
        """Copy a file."""
        ...

    def try_copy(self, source: StrPath, target: StrPath, *, log: bool = True) -> OperationResult:
        """Copy a file, never raising."""
        ...

    def get_file_size(self, path: StrPath, *, log: bool = True) -> int:
        """Get the size of a file in bytes."""
        ...

    def remove_read_only_and_archive_attributes(
        self, path: StrPath, *, log: bool = True
    ) -> OperationResult:
        """Clear the read-only and archive attributes of a file, never raising."""
        ...

    def remove_read_only_and_archive_attributes_from_all(
        self, directory: StrPath, *, log: bool = True
    ) -> None:
        """Clear attributes on every file under a directory, best effort."""
        ...

    def delete_many(
        self, files: Iterable[FileDescriptor], *, parallel: bool = False, log: bool = True
    ) -> None:
        """Delete every file in a list."""
        ...

    def list_files_recursively(self, directory: StrPath, *, log: bool = True) -> list[Path]:
        """List every file under a directory, failing on any traversal error."""
        ...

    def list_file_descriptors_recursively_safe(
        self, directory: StrPath, *, log: bool = True
    ) -> list[FileDescriptor]:
        """List every readable file under a directory, never raising."""
        ...

    def delete_all_safe(self, directory: StrPath, *, log: bool = True) -> None:
        """Delete every readable file under a directory."""
        ...

    def try_delete_all_safe(self, directory: StrPath, *, log: bool = True) -> None:
        """Delete every readable file under a directory, never raising."""
        ...

    def copy_directory_recursively(
        self,
        source_dir: StrPath,
        destination_dir: StrPath,
        *,
        overwrite: bool = True,
        log: bool = True,
    ) -> None:
        """Copy a directory tree, including empty directories."""
        ...

    def copy_top_level_files(
        self,
        source_dir: StrPath,
        destination_dir: StrPath,
        *,
        overwrite: bool = True,
        log: bool = True,
    ) -> None:
        """Copy the files directly inside a directory."""
        ...

    def rename_all_recursively(
        self, source_directory: StrPath, old_value: str, new_value: str, *, log: bool = True
    ) -> None:
        """Rename every file under a directory by substring replacement."""
        ...

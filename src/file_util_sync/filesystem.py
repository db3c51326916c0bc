"""Synchronous file operations.

This module provides FileUtilSync, a thin layer over the platform file
APIs. Each operation performs a single filesystem call sequence, wrapped
with optional log records.

Strict operations let the underlying ``OSError`` propagate. Try-prefixed
operations, attribute clearing and the safe traversal log failures and
return an ``OperationResult`` or a partial result instead.
"""

from __future__ import annotations

import errno
import logging
import os
import shutil
import stat
import sys
import tempfile
import uuid
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import IO, Any, Iterable

from file_util_sync.config import FileUtilSettings
from file_util_sync.directory import DirectoryUtil
from file_util_sync.protocols import DirectoryHelper
from file_util_sync.types import FileDescriptor, OperationResult, StrPath

# Windows attribute bits cleared by remove_read_only_and_archive_attributes
FILE_ATTRIBUTE_READONLY = 0x1
FILE_ATTRIBUTE_ARCHIVE = 0x20
FILE_ATTRIBUTE_NORMAL = 0x80


def _raise(error: OSError) -> None:
    """os.walk error handler that aborts the walk."""
    raise error


def _already_exists(path: StrPath) -> FileExistsError:
    return FileExistsError(errno.EEXIST, os.strerror(errno.EEXIST), os.fspath(path))


class FileUtilSync:
    """Synchronous file utility.

    Follows Separate Use from Creation: constructor requires all dependencies.
    Use factory method `create()` for production instantiation with defaults.
    Holds no state between calls other than its collaborators.
    """

    def __init__(
        self,
        directory_util: DirectoryHelper,
        settings: FileUtilSettings,
        logger: logging.Logger,
    ) -> None:
        """Initialize with required dependencies.

        Args:
            directory_util: Helper used to create destination directories.
            settings: Encoding and concurrency settings.
            logger: Logger receiving operation records.
        """
        self.directory_util = directory_util
        self.settings = settings
        self.logger = logger

    @classmethod
    def create(
        cls,
        directory_util: DirectoryHelper | None = None,
        settings: FileUtilSettings | None = None,
        logger: logging.Logger | None = None,
    ) -> FileUtilSync:
        """Factory method for production instantiation.

        Args:
            directory_util: Optional directory helper (created if not provided).
            settings: Optional settings (defaults if not provided).
            logger: Optional logger (module logger if not provided).

        Returns:
            Configured FileUtilSync instance.
        """
        logger = logger or logging.getLogger(__name__)
        return cls(
            directory_util=directory_util or DirectoryUtil(logger),
            settings=settings or FileUtilSettings(),
            logger=logger,
        )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def _log(self, log: bool, level: int, msg: str, *args: Any) -> None:
        if log:
            self.logger.log(level, msg, *args)

    def _log_error(self, log: bool, error: BaseException, msg: str, *args: Any) -> None:
        if log:
            self.logger.error(msg, *args, exc_info=error)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def read(self, path: StrPath, *, log: bool = True) -> str:
        """Read a whole file as text.

        Line terminators are returned as stored on disk.

        Args:
            path: File to read.
            log: Emit log records.

        Returns:
            Decoded file content.

        Raises:
            FileNotFoundError: If file does not exist.
            PermissionError: If the file cannot be opened.
        """
        self._log(log, logging.DEBUG, "read start for %s ...", path)
        with open(path, encoding=self.settings.encoding, newline="") as f:
            return f.read()

    def read_bytes(self, path: StrPath, *, log: bool = True) -> bytes:
        """Read a whole file as bytes."""
        self._log(log, logging.DEBUG, "read_bytes start for %s ...", path)
        return Path(path).read_bytes()

    def read_lines(self, path: StrPath, *, log: bool = True) -> list[str]:
        """Read a file as lines, without line terminators.

        An empty file yields an empty list.
        """
        self._log(log, logging.DEBUG, "read_lines start for %s ...", path)
        with open(path, encoding=self.settings.encoding) as f:
            return [line.rstrip("\n") for line in f]

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def write(self, path: StrPath, content: str, *, log: bool = True) -> None:
        """Create or truncate a file and write text to it.

        The content is written without newline translation. The write is
        not atomic.
        """
        self._log(log, logging.DEBUG, "write start for %s ...", path)
        with open(path, "w", encoding=self.settings.encoding, newline="") as f:
            f.write(content)

    def write_lines(self, path: StrPath, lines: Iterable[str], *, log: bool = True) -> None:
        """Write each line followed by a line terminator."""
        self._log(log, logging.DEBUG, "write_lines start for %s ...", path)
        with open(path, "w", encoding=self.settings.encoding) as f:
            for line in lines:
                f.write(line)
                f.write("\n")

    def write_bytes(self, path: StrPath, data: bytes, *, log: bool = True) -> None:
        """Create or truncate a file and write bytes to it."""
        self._log(log, logging.DEBUG, "write_bytes start for %s ...", path)
        Path(path).write_bytes(data)

    def write_from_stream(self, path: StrPath, stream: IO[bytes], *, log: bool = True) -> None:
        """Copy a seekable stream into a file.

        The stream is rewound before copying, so callers need not seek it.
        The destination is opened without truncation, so an existing file
        longer than the stream keeps its trailing bytes. The destination is
        closed after writing; the stream is left open.

        Args:
            path: Destination file.
            stream: Seekable binary stream.
            log: Emit log records.
        """
        self._log(log, logging.DEBUG, "write_from_stream start for %s ...", path)
        stream.seek(0)

        fd = os.open(path, os.O_WRONLY | os.O_CREAT | getattr(os, "O_BINARY", 0), 0o666)
        try:
            destination = os.fdopen(fd, "wb")
        except BaseException:
            os.close(fd)
            raise
        with destination:
            shutil.copyfileobj(stream, destination)

    # ------------------------------------------------------------------
    # Single file
    # ------------------------------------------------------------------

    def exists(self, path: StrPath, *, log: bool = True) -> bool:
        """Check if a regular file exists at a path.

        Returns False for directories and for paths that cannot be probed.
        """
        self._log(log, logging.DEBUG, "Checking if file exists: %s ...", path)

        if not os.path.isfile(path):
            self._log(log, logging.DEBUG, "%s does not exist", path)
            return False

        self._log(log, logging.DEBUG, "File exists: %s", path)
        return True

    def delete(self, path: StrPath, *, log: bool = True) -> None:
        """Delete a file.

        Raises:
            FileNotFoundError: If file does not exist.
        """
        self._log(log, logging.DEBUG, "Deleting %s ...", path)
        os.remove(path)

    def delete_if_exists(self, path: StrPath, *, log: bool = True) -> bool:
        """Delete a file if it exists.

        Returns:
            True if the file was deleted, False if it did not exist.

        Raises:
            OSError: If deleting an existing file fails.
        """
        self._log(log, logging.DEBUG, "Deleting file if it exists: %s ...", path)

        if not self.exists(path, log=log):
            return False

        self.delete(path, log=log)
        return True

    def try_delete(self, path: StrPath, *, log: bool = True) -> OperationResult:
        """Delete a file, logging instead of raising on failure."""
        self._log(log, logging.DEBUG, "Trying to delete %s ...", path)

        try:
            os.remove(path)
        except Exception as e:
            self._log_error(log, e, "Exception deleting %s", path)
            return OperationResult.failed()

        return OperationResult.ok()

    def try_delete_if_exists(self, path: StrPath, *, log: bool = True) -> OperationResult:
        """Delete a file if it exists, logging instead of raising on failure.

        A missing file fails without any deletion attempt.
        """
        self._log(log, logging.DEBUG, "Trying to delete file if it exists: %s ...", path)

        if not self.exists(path, log=log):
            return OperationResult.failed()

        return self.try_delete(path, log=log)

    def move(self, source: StrPath, target: StrPath, *, log: bool = True) -> None:
        """Move a file.

        Moving a path onto itself logs a warning and does nothing. Directories
        are rejected.

        Args:
            source: File to move.
            target: New location. Must not exist.
            log: Emit log records.

        Raises:
            FileExistsError: If target already exists.
            FileNotFoundError: If source is not an existing file.
        """
        if os.fspath(source) == os.fspath(target):
            self._log(
                log, logging.WARNING, "Not moving file (%s) because source = target", source
            )
            return

        self._log(log, logging.DEBUG, "Moving %s to %s ...", source, target)

        if not os.path.isfile(source):
            raise FileNotFoundError(errno.ENOENT, "Not a file", os.fspath(source))
        if os.path.lexists(target):
            raise _already_exists(target)
        shutil.move(source, target)

        self._log(log, logging.DEBUG, "Finished moving %s to %s", source, target)

    def copy(
        self,
        source: StrPath,
        target: StrPath,
        *,
        overwrite: bool = False,
        log: bool = True,
    ) -> None:
        """Copy a file's content and permission bits.

        Args:
            source: File to copy.
            target: Destination file.
            overwrite: Replace an existing target.
            log: Emit log records.

        Raises:
            FileExistsError: If target exists and overwrite is False.
            FileNotFoundError: If source does not exist.
        """
        self._log(log, logging.DEBUG, "Copying %s to %s ...", source, target)
        self._copy_file(source, target, overwrite)
        self._log(log, logging.DEBUG, "Finished copying %s to %s", source, target)

    def try_copy(self, source: StrPath, target: StrPath, *, log: bool = True) -> OperationResult:
        """Copy a file without overwriting, logging instead of raising on failure."""
        self._log(log, logging.DEBUG, "Trying to copy %s to %s ...", source, target)

        try:
            self._copy_file(source, target, overwrite=False)
        except Exception as e:
            self._log_error(log, e, "Exception copying %s to %s", source, target)
            return OperationResult.failed()

        self._log(log, logging.DEBUG, "Finished copying %s to %s", source, target)
        return OperationResult.ok()

    @staticmethod
    def _copy_file(source: StrPath, target: StrPath, overwrite: bool) -> None:
        if not overwrite and os.path.lexists(target):
            raise _already_exists(target)
        shutil.copyfile(source, target)
        shutil.copymode(source, target)

    def get_file_size(self, path: StrPath, *, log: bool = True) -> int:
        """Get the size of a file in bytes.

        Raises:
            FileNotFoundError: If file does not exist.
        """
        self._log(log, logging.DEBUG, "Getting size of %s ...", path)
        return os.path.getsize(path)

    @staticmethod
    def get_temp_file_name() -> Path:
        """Build a unique path inside the temp directory.

        The file is not created. Unlike ``tempfile.mkstemp`` this does not
        probe the filesystem for collisions; uniqueness relies on a random
        UUID.
        """
        return Path(tempfile.gettempdir()) / str(uuid.uuid4())

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def remove_read_only_and_archive_attributes(
        self, path: StrPath, *, log: bool = True
    ) -> OperationResult:
        """Clear the read-only and archive attributes of a file.

        On POSIX the owner write bit is set; there is no archive bit.
        Failures (missing file, permission denied) are logged.
        """
        try:
            _clear_attributes(path)
        except Exception as e:
            self._log_error(
                log, e, "Could not remove attributes from file (%s), skipping", path
            )
            return OperationResult.failed()

        return OperationResult.ok()

    def remove_read_only_and_archive_attributes_from_all(
        self, directory: StrPath, *, log: bool = True
    ) -> None:
        """Clear attributes on every readable file under a directory.

        Individual failures are logged and skipped.
        """
        self._log(log, logging.INFO, "Trying to remove read-only/archive in %s ...", directory)

        for descriptor in self.list_file_descriptors_recursively_safe(directory, log=log):
            self.remove_read_only_and_archive_attributes(descriptor.path, log=log)

        self._log(
            log, logging.DEBUG, "Completed trying to remove read-only and archive from all files"
        )

    # ------------------------------------------------------------------
    # Bulk / recursive
    # ------------------------------------------------------------------

    def delete_many(
        self,
        files: Iterable[FileDescriptor],
        *,
        parallel: bool = False,
        log: bool = True,
    ) -> None:
        """Delete every file in a list.

        Sequential deletion runs in list order and stops at the first
        failure. Parallel deletion runs every deletion as an independent
        task, waits for all of them, then raises an ExceptionGroup holding
        each failure.

        Args:
            files: Descriptors of the files to delete.
            parallel: Delete concurrently, bounded by settings.max_workers.
            log: Emit log records.

        Raises:
            OSError: First failure, in sequential mode.
            ExceptionGroup: Every failure, in parallel mode.
        """
        paths = [descriptor.path for descriptor in files]

        if not parallel:
            for path in paths:
                self.delete(path, log=log)
            return

        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
            futures = [executor.submit(self.delete, path, log=log) for path in paths]

        failures = [
            error
            for error in (future.exception() for future in futures)
            if isinstance(error, Exception)
        ]
        if failures:
            raise ExceptionGroup(
                f"Failed to delete {len(failures)} of {len(paths)} files", failures
            )

    def list_files_recursively(self, directory: StrPath, *, log: bool = True) -> list[Path]:
        """List every file under a directory, at any depth.

        Raises:
            FileNotFoundError: If directory does not exist.
            OSError: If any part of the tree cannot be read.
        """
        self._log(
            log, logging.DEBUG, "Getting all files from directory (%s) recursively...", directory
        )

        files: list[Path] = []
        for root, _dirs, names in os.walk(directory, onerror=_raise):
            files.extend(Path(root) / name for name in names)
        return files

    def list_file_descriptors_recursively_safe(
        self, directory: StrPath, *, log: bool = True
    ) -> list[FileDescriptor]:
        """List descriptors for every readable file under a directory.

        Unreadable directories and entries are logged and skipped. A root
        that is missing or unreadable yields an empty list. Never raises
        ``OSError``.

        Args:
            directory: Root directory.
            log: Emit log records.

        Returns:
            Descriptors collected, in traversal order.
        """
        self._log(
            log, logging.DEBUG, "Getting all file descriptors in %s recursively...", directory
        )

        descriptors: list[FileDescriptor] = []
        pending: list[StrPath] = [directory]

        while pending:
            current = pending.pop()
            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError as e:
                if current is directory:
                    self._log(log, logging.WARNING, "%s: %s", type(e).__name__, e)
                else:
                    self._log(log, logging.WARNING, "Unable to enumerate %s: %s", current, e)
                continue

            subdirectories: list[str] = []
            for entry in entries:
                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirectories.append(entry.path)
                    elif entry.is_file():
                        descriptors.append(FileDescriptor.from_entry(entry))
                except OSError as e:
                    self._log(log, logging.WARNING, "Unable to read %s: %s", entry.path, e)

            pending.extend(reversed(subdirectories))

        self._log(
            log,
            logging.DEBUG,
            "Completed getting all files in %s, number: %d",
            directory,
            len(descriptors),
        )
        return descriptors

    def delete_all_safe(self, directory: StrPath, *, log: bool = True) -> None:
        """Delete every readable file under a directory.

        Stops at the first file that fails to delete, leaving the rest.

        Raises:
            OSError: If deleting a file fails.
        """
        self._log(log, logging.INFO, "Deleting all files in %s ...", directory)

        self.delete_many(self.list_file_descriptors_recursively_safe(directory, log=log), log=log)

        self._log(log, logging.DEBUG, "Completed deleting all files from %s", directory)

    def try_delete_all_safe(self, directory: StrPath, *, log: bool = True) -> None:
        """Delete every readable file under a directory, logging failures."""
        self._log(log, logging.INFO, "Trying to delete all files in %s ...", directory)

        for descriptor in self.list_file_descriptors_recursively_safe(directory, log=log):
            self.try_delete(descriptor.path, log=log)

        self._log(log, logging.DEBUG, "Completed deleting all files from %s", directory)

    def copy_directory_recursively(
        self,
        source_dir: StrPath,
        destination_dir: StrPath,
        *,
        overwrite: bool = True,
        log: bool = True,
    ) -> None:
        """Copy a directory tree.

        The directory structure, empty directories included, is created
        first; then every file is copied to the same relative location.

        Args:
            source_dir: Directory to copy.
            destination_dir: Destination root, created if missing.
            overwrite: Replace files that already exist at the destination.
            log: Emit log records.

        Raises:
            FileNotFoundError: If source_dir does not exist.
            FileExistsError: If a file collides and overwrite is False.
        """
        self._log(
            log, logging.DEBUG, "Copying %s to %s recursively ...", source_dir, destination_dir
        )
        source = Path(source_dir)
        destination = Path(destination_dir)

        directories = [
            Path(root) / name
            for root, dirs, _files in os.walk(source, onerror=_raise)
            for name in dirs
        ]
        destination.mkdir(parents=True, exist_ok=True)
        for directory in directories:
            (destination / directory.relative_to(source)).mkdir(parents=True, exist_ok=True)

        for file in self.list_files_recursively(source, log=log):
            self._copy_file(file, destination / file.relative_to(source), overwrite)

        self._log(log, logging.DEBUG, "Finished copying %s to %s", source_dir, destination_dir)

    def copy_top_level_files(
        self,
        source_dir: StrPath,
        destination_dir: StrPath,
        *,
        overwrite: bool = True,
        log: bool = True,
    ) -> None:
        """Copy the files directly inside a directory, keeping their names.

        Subdirectories are not copied.

        Raises:
            FileNotFoundError: If source_dir does not exist.
        """
        if not os.path.isdir(source_dir):
            raise FileNotFoundError(
                errno.ENOENT,
                f"Source directory ({source_dir}) does not exist",
                os.fspath(source_dir),
            )

        self._log(log, logging.DEBUG, "Copying files in %s to %s ...", source_dir, destination_dir)
        self.directory_util.ensure_directory_exists(destination_dir, log=log)

        with os.scandir(source_dir) as it:
            files = [entry for entry in it if entry.is_file()]

        for entry in files:
            self._copy_file(entry.path, Path(destination_dir) / entry.name, overwrite)

    def rename_all_recursively(
        self,
        source_directory: StrPath,
        old_value: str,
        new_value: str,
        *,
        log: bool = True,
    ) -> None:
        """Rename every file under a directory by substring replacement.

        The replacement applies to the full path. Files whose path does not
        change are left in place.

        Raises:
            OSError: If the tree cannot be listed or a move fails.
        """
        for file in self.list_files_recursively(source_directory, log=log):
            new_path = os.fspath(file).replace(old_value, new_value)
            self.move(file, new_path, log=log)


def _clear_attributes(path: StrPath) -> None:
    st = os.stat(path)

    if sys.platform == "win32":
        import ctypes

        attributes = st.st_file_attributes
        cleared = attributes & ~(FILE_ATTRIBUTE_READONLY | FILE_ATTRIBUTE_ARCHIVE)
        if cleared == attributes:
            return
        if not ctypes.windll.kernel32.SetFileAttributesW(  # type: ignore[attr-defined]
            os.fspath(path), cleared or FILE_ATTRIBUTE_NORMAL
        ):
            raise ctypes.WinError()  # type: ignore[attr-defined]
        return

    if not st.st_mode & stat.S_IWUSR:
        os.chmod(path, stat.S_IMODE(st.st_mode) | stat.S_IWUSR)

"""Directory helpers used by file operations."""

from __future__ import annotations

import logging
import os

from file_util_sync.types import StrPath


class DirectoryUtil:
    """Production directory helper.

    Satisfies the DirectoryHelper protocol structurally.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(__name__)

    def ensure_directory_exists(self, path: StrPath, *, log: bool = True) -> bool:
        """Create a directory and its parents if missing.

        Args:
            path: Directory to create.
            log: Emit log records.

        Returns:
            True if the directory was created, False if it already existed.

        Raises:
            FileExistsError: If the path exists and is not a directory.
        """
        if os.path.isdir(path):
            return False

        if log:
            self.logger.debug("Creating directory %s ...", path)
        os.makedirs(path, exist_ok=True)
        return True

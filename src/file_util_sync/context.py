"""Application context for dependency injection.

This module separates object creation from object use, so embedding
applications and CLI commands receive fully wired collaborators.

Dependencies are typed using Protocols (abstract interfaces) rather than
concrete implementations, enabling easy substitution of test doubles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from file_util_sync.config import FileUtilSettings, load_settings
from file_util_sync.protocols import DirectoryHelper, FileOps


def _default_directory_util() -> DirectoryHelper:
    """Create the default directory helper implementation."""
    from file_util_sync.directory import DirectoryUtil

    return DirectoryUtil()


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for all services used by CLI commands.
    """

    file_util: FileOps
    settings: FileUtilSettings = field(default_factory=FileUtilSettings)
    directory_util: DirectoryHelper = field(default_factory=_default_directory_util)
    config_path: Path | None = None


def create_context(
    config_path: Path | None = None,
    logger: logging.Logger | None = None,
) -> AppContext:
    """Factory for application dependencies.

    Creates all services with proper wiring. Use this in production code.
    For tests, construct AppContext directly with test doubles.

    Args:
        config_path: Override the config file location.
        logger: Logger shared by the file and directory utilities.

    Returns:
        Configured AppContext with all dependencies.

    Raises:
        ConfigError: If the config file is invalid.
    """
    from file_util_sync.directory import DirectoryUtil
    from file_util_sync.filesystem import FileUtilSync

    settings = load_settings(config_path)
    logger = logger or logging.getLogger("file_util_sync")
    directory_util = DirectoryUtil(logger)
    file_util = FileUtilSync.create(
        directory_util=directory_util,
        settings=settings,
        logger=logger,
    )

    return AppContext(
        file_util=file_util,
        settings=settings,
        directory_util=directory_util,
        config_path=config_path,
    )

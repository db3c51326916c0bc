"""Shared test fixtures."""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from typing import Callable
from unittest.mock import MagicMock

import pytest

from file_util_sync.config import FileUtilSettings
from file_util_sync.directory import DirectoryUtil
from file_util_sync.filesystem import FileUtilSync

LOGGER_NAME = "file_util_sync.tests"


@pytest.fixture
def test_logger() -> logging.Logger:
    """Logger injected into the utilities under test."""
    return logging.getLogger(LOGGER_NAME)


@pytest.fixture
def file_util(test_logger: logging.Logger) -> FileUtilSync:
    """Create a FileUtilSync wired with real collaborators."""
    return FileUtilSync(
        directory_util=DirectoryUtil(test_logger),
        settings=FileUtilSettings(),
        logger=test_logger,
    )


@pytest.fixture
def mock_directory_util() -> MagicMock:
    """Create a mock DirectoryHelper."""
    helper = MagicMock()
    helper.ensure_directory_exists.return_value = True
    return helper


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small directory tree.

    Layout::

        src/a.txt
        src/sub/b.txt
        src/sub/deep/c.bin
        src/empty/deeper/
    """
    root = tmp_path / "src"
    (root / "sub" / "deep").mkdir(parents=True)
    (root / "empty" / "deeper").mkdir(parents=True)
    (root / "a.txt").write_text("alpha")
    (root / "sub" / "b.txt").write_text("bravo")
    (root / "sub" / "deep" / "c.bin").write_bytes(b"\x00\x01\x02")
    return root


# ============================================================================
# Failure Injection
# ============================================================================


@pytest.fixture
def deny_scandir(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Make os.scandir raise PermissionError for directories with a given name.

    Permission bits are not enforced for root, so access errors are injected.
    """

    def install(name: str) -> None:
        real_scandir = os.scandir

        def fake_scandir(path: str | os.PathLike[str] = ".") -> object:
            if Path(path).name == name:
                raise PermissionError(errno.EACCES, "Permission denied", os.fspath(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", fake_scandir)

    return install


@pytest.fixture
def deny_remove(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Make os.remove raise PermissionError for files with a given name."""

    def install(name: str) -> None:
        real_remove = os.remove

        def fake_remove(path: str | os.PathLike[str], *args: object, **kwargs: object) -> None:
            if Path(path).name == name:
                raise PermissionError(errno.EACCES, "Permission denied", os.fspath(path))
            real_remove(path, *args, **kwargs)

        monkeypatch.setattr(os, "remove", fake_remove)

    return install

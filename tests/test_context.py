"""Tests for context module."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from file_util_sync.config import ConfigError, FileUtilSettings
from file_util_sync.context import AppContext, create_context
from file_util_sync.directory import DirectoryUtil
from file_util_sync.filesystem import FileUtilSync


class TestAppContext:
    """Tests for AppContext dataclass."""

    def test_create_with_all_dependencies(self) -> None:
        """Test creating context with all dependencies."""
        file_util = MagicMock()
        directory_util = MagicMock()
        settings = FileUtilSettings(max_workers=2)
        ctx = AppContext(
            file_util=file_util,
            settings=settings,
            directory_util=directory_util,
        )
        assert ctx.file_util is file_util
        assert ctx.settings is settings
        assert ctx.directory_util is directory_util
        assert ctx.config_path is None

    def test_defaults(self) -> None:
        """Test context creates default settings and directory helper."""
        ctx = AppContext(file_util=MagicMock())
        assert ctx.settings == FileUtilSettings()
        assert isinstance(ctx.directory_util, DirectoryUtil)


class TestCreateContext:
    """Tests for create_context factory function."""

    def test_create_context_default(self, tmp_path: Path) -> None:
        """Test creating context without a config file."""
        ctx = create_context(config_path=tmp_path / "missing.yaml")
        assert isinstance(ctx.file_util, FileUtilSync)
        assert ctx.settings == FileUtilSettings()
        assert ctx.config_path == tmp_path / "missing.yaml"

    def test_create_context_wires_dependencies(self, tmp_path: Path) -> None:
        """Test the file utility shares the context's collaborators."""
        logger = logging.getLogger("file_util_sync.tests.context")
        ctx = create_context(config_path=tmp_path / "missing.yaml", logger=logger)
        assert isinstance(ctx.file_util, FileUtilSync)
        assert ctx.file_util.directory_util is ctx.directory_util
        assert ctx.file_util.settings is ctx.settings
        assert ctx.file_util.logger is logger

    def test_create_context_loads_settings(self, tmp_path: Path) -> None:
        """Test settings come from the config file."""
        config = tmp_path / "config.yaml"
        config.write_text("max_workers: 3\n")
        ctx = create_context(config_path=config)
        assert ctx.settings.max_workers == 3

    def test_create_context_invalid_config(self, tmp_path: Path) -> None:
        """Test an invalid config file raises ConfigError."""
        config = tmp_path / "config.yaml"
        config.write_text("encoding: nope-codec\n")
        with pytest.raises(ConfigError):
            create_context(config_path=config)

"""Synchronous file-system utilities with optional logging."""

__version__ = "0.1.0"

# Export protocol interfaces for type hints and dependency injection
from file_util_sync.filesystem import FileUtilSync
from file_util_sync.protocols import (
    DirectoryHelper,
    FileOps,
)
from file_util_sync.types import FileDescriptor, OperationResult

__all__ = [
    "__version__",
    "DirectoryHelper",
    "FileDescriptor",
    "FileOps",
    "FileUtilSync",
    "OperationResult",
]

"""Shared data types for file utilities."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict

__all__ = ["FileDescriptor", "OperationResult", "StrPath"]

StrPath = str | os.PathLike[str]


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a best-effort (try-prefixed) operation.

    Only the success flag is exposed. The underlying failure is logged by
    the operation that caught it and is never handed back to the caller.

    Attributes:
        success: True if the operation completed.
    """

    success: bool

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls) -> OperationResult:
        """Build a successful result."""
        return cls(success=True)

    @classmethod
    def failed(cls) -> OperationResult:
        """Build a failed result."""
        return cls(success=False)


class FileDescriptor(BaseModel):
    """Snapshot of a file found during directory enumeration.

    May be stale the instant after it is captured.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    size: int
    mode: int

    @property
    def read_only(self) -> bool:
        """True if the owner write bit is not set."""
        return not self.mode & stat.S_IWUSR

    @classmethod
    def from_entry(cls, entry: os.DirEntry[str]) -> FileDescriptor:
        """Build a descriptor from a directory entry.

        Args:
            entry: Entry produced by ``os.scandir``.

        Returns:
            Descriptor for the entry.

        Raises:
            OSError: If the entry cannot be stat'ed.
        """
        st = entry.stat()
        return cls(path=Path(entry.path), size=st.st_size, mode=st.st_mode)

"""Minimal file-system interface used by the loader and discoverer.

Both components take a ``FileSystem`` so they can be pointed at a
synthetic tree in tests instead of the real disk.
"""

import os
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Entry:
    """A single directory entry.

    Attributes:
        name: Base name of the entry.
        is_dir: Whether the entry is a directory.
    """

    name: str
    is_dir: bool


class FileSystem(Protocol):
    """Read-only operations the pipeline needs from a file system."""

    def list_dir(self, path: str) -> list[Entry]:
        """List the immediate entries of a directory in listing order.

        Raises:
            FileNotFoundError: If the directory does not exist.
            OSError: If the directory cannot be listed.
        """
        ...

    def is_dir(self, path: str) -> bool:
        """Return whether ``path`` is an existing directory."""
        ...

    def is_file(self, path: str) -> bool:
        """Return whether ``path`` is an existing regular file."""
        ...

    def read_text(self, path: str) -> str:
        """Read a file as UTF-8 text."""
        ...


class OSFileSystem:
    """FileSystem backed by the operating system."""

    def list_dir(self, path: str) -> list[Entry]:
        with os.scandir(path) as it:
            return [Entry(name=e.name, is_dir=e.is_dir()) for e in it]

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def read_text(self, path: str) -> str:
        with open(path, encoding="utf-8") as f:
            return f.read()

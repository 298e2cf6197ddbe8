"""Sub-package discovery.

Lists the directory of a package under the workspace root, or under
the standard library root when the workspace has no such directory,
and reports the child directories that directly hold source files.
"""

import logging
import os
from typing import Optional

from pkgdoc.parsers.loader import import_path_parts
from pkgdoc.utils.fs import Entry, FileSystem, OSFileSystem

logger = logging.getLogger(__name__)


class SubPackageDiscoverer:
    """Finds the importable sub-packages of a package.

    Discovery is fatal at the package root and best-effort per entry:
    a child directory that cannot be listed counts as holding no
    sources.
    """

    def __init__(
        self,
        primary_root: str,
        secondary_root: str,
        fs: Optional[FileSystem] = None,
        extension: str = ".py",
    ) -> None:
        """Initialize the discoverer.

        Args:
            primary_root: Search root tried first.
            secondary_root: Search root used when the package directory
                does not exist under the primary root.
            fs: File system to list. Defaults to the real one.
            extension: Suffix identifying source files.
        """
        self.primary_root = primary_root
        self.secondary_root = secondary_root
        self.extension = extension
        self._fs = fs or OSFileSystem()

    def discover(self, import_path: str) -> list[str]:
        """Return the names of the sub-packages of a package.

        Args:
            import_path: Import path of the package.

        Returns:
            Child directory names in directory listing order.

        Raises:
            OSError: If the package directory cannot be listed under
                either root. Only a missing primary directory triggers
                the fallback; other errors there propagate at once.
        """
        parts = import_path_parts(import_path)
        root = os.path.join(self.primary_root, *parts)
        try:
            entries = self._fs.list_dir(root)
        except FileNotFoundError:
            root = os.path.join(self.secondary_root, *parts)
            logger.debug("%s not in primary root, trying %s", import_path, root)
            entries = self._fs.list_dir(root)

        sub_packages = [
            entry.name
            for entry in entries
            if entry.is_dir and self.has_source_files(os.path.join(root, entry.name))
        ]
        logger.debug("Found %d sub-packages under %s", len(sub_packages), root)
        return sub_packages

    def has_source_files(self, path: str) -> bool:
        """Return whether a directory directly holds a source file."""
        try:
            entries = self._fs.list_dir(path)
        except OSError:
            return False
        return any(self._is_source(entry) for entry in entries)

    def _is_source(self, entry: Entry) -> bool:
        return not entry.is_dir and entry.name.endswith(self.extension)

"""Exceptions raised by the documentation pipeline.

Only two failures cross the pipeline boundary: a package that cannot be
loaded at all, and a package whose source root cannot be listed when
looking for sub-packages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from pkgdoc.model import Package


class PkgdocError(RuntimeError):
    """Base class for all pkgdoc errors."""


class PackageLoadError(PkgdocError):
    """Raised when a package cannot be resolved or parsed."""

    def __init__(self, import_path: str, message: str) -> None:
        super().__init__(message)
        self.import_path = import_path


class PackageNotFoundError(PackageLoadError):
    """Raised when no search root holds an import path, or it has no sources."""


class SourceParseError(PackageLoadError):
    """Raised for an unreadable source file when errors are not suppressed."""

    def __init__(self, import_path: str, path: str, message: str) -> None:
        super().__init__(import_path, message)
        self.path = path


class SubPackageDiscoveryError(PkgdocError):
    """Raised when the package source root cannot be listed.

    The package itself was loaded, so the model built so far travels with
    the error. ``package.sub_packages`` is empty.
    """

    def __init__(self, import_path: str, package: Optional[Package], message: str) -> None:
        super().__init__(message)
        self.import_path = import_path
        self.package = package

"""Documentation pipeline.

Loads a package, extracts and normalizes its declarations, and
discovers its sub-packages. Each call builds an independent model;
a Documenter holds configuration only and can be shared.
"""

import dataclasses
import logging
import os
from typing import Optional

from pkgdoc.analysis.subpackages import SubPackageDiscoverer
from pkgdoc.errors import SubPackageDiscoveryError
from pkgdoc.model import Package
from pkgdoc.normalizer import new_package as build_package
from pkgdoc.parsers.extractor import DeclarationExtractor
from pkgdoc.parsers.loader import ErrorHandler, SourceLoader
from pkgdoc.utils.config import AppConfig
from pkgdoc.utils.fs import FileSystem, OSFileSystem

logger = logging.getLogger(__name__)


class Documenter:
    """Builds package documentation models.

    Wires the source loader, declaration extractor, normalizer and
    sub-package discoverer from an AppConfig.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        fs: Optional[FileSystem] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        """Initialize the documenter.

        Args:
            config: Application configuration. Defaults are used if None.
            fs: File system to read from. Defaults to the real one.
            error_handler: Sink for suppressed per-file errors.
        """
        self.config = config or AppConfig()
        fs = fs or OSFileSystem()
        search = self.config.search
        roots = [os.path.abspath(search.workspace_root), os.path.abspath(search.stdlib_root)]

        self.loader = SourceLoader(
            roots,
            fs=fs,
            extension=search.extension,
            suppress_errors=self.config.loader.suppress_errors,
            error_handler=error_handler,
        )
        self.extractor = DeclarationExtractor(include_private=self.config.loader.include_private)
        self.discoverer = SubPackageDiscoverer(roots[0], roots[1], fs=fs, extension=search.extension)

    def document(self, import_path: str) -> Package:
        """Build the documentation model of a package.

        Args:
            import_path: Import path of the package.

        Returns:
            The complete package model.

        Raises:
            PackageLoadError: If the package cannot be loaded.
            SubPackageDiscoveryError: If the package source root cannot
                be listed. The model built so far is on ``error.package``.
        """
        loaded = self.loader.resolve(import_path)
        raw = self.extractor.extract(loaded)
        package = build_package(raw, include_private=self.config.loader.include_private)

        sub_packages: list[str] = []
        if loaded.is_module:
            logger.debug("%s is a module, skipping sub-package discovery", package.import_path)
        else:
            try:
                sub_packages = self.discoverer.discover(package.import_path)
            except OSError as e:
                logger.warning("Cannot list sub-packages of %s: %s", package.import_path, e)
                raise SubPackageDiscoveryError(
                    package.import_path,
                    package,
                    f"cannot list sub-packages of {package.import_path}: {e}",
                ) from e

        logger.info(
            "Documented %s: %d constants, %d variables, %d functions, %d types, %d sub-packages",
            package.import_path,
            len(package.constants),
            len(package.variables),
            len(package.functions),
            len(package.types),
            len(sub_packages),
        )
        return dataclasses.replace(package, sub_packages=tuple(sub_packages))


def new_package(
    import_path: str,
    config: Optional[AppConfig] = None,
    fs: Optional[FileSystem] = None,
) -> Package:
    """Build the documentation model of a package.

    Shorthand for ``Documenter(config, fs).document(import_path)``.
    """
    return Documenter(config, fs=fs).document(import_path)

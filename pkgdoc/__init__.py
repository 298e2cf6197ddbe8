"""Package documentation extractor.

Parses the sources of a Python package and builds a documentation
model of its constants, variables, functions and classes, together
with the names of its sub-packages.
"""

import logging

from pkgdoc.documenter import Documenter, new_package
from pkgdoc.errors import (
    PackageLoadError,
    PackageNotFoundError,
    PkgdocError,
    SourceParseError,
    SubPackageDiscoveryError,
)
from pkgdoc.model import Doc, Function, Package, Type, Value

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Doc",
    "Documenter",
    "Function",
    "Package",
    "PackageLoadError",
    "PackageNotFoundError",
    "PkgdocError",
    "SourceParseError",
    "SubPackageDiscoveryError",
    "Type",
    "Value",
    "new_package",
]

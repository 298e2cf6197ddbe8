"""Data models for loaded sources and raw grouped declarations.

These are the intermediate structures passed from the loader to the
extractor, and from the extractor to the normalizer. They still hold
AST nodes; the public model in ``pkgdoc.model`` holds only text.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field


@dataclass
class SourceFile:
    """A parsed source file.

    Attributes:
        path: Absolute path of the file.
        source: Full source text.
        tree: Parsed module.
        comments: Comment text (without the leading ``#``) keyed by
            1-based line number.
        inline: Line numbers whose comment follows code on the same line.
    """

    path: str
    source: str
    tree: ast.Module
    comments: dict[int, str] = field(default_factory=dict)
    inline: set[int] = field(default_factory=set)

    @property
    def lines(self) -> list[str]:
        return self.source.splitlines()


@dataclass
class LoadedPackage:
    """A resolved package and its parsed files.

    Attributes:
        import_path: Dotted import path the package was resolved from.
        name: Package name (last import path component).
        directory: Directory holding the package sources.
        files: Parsed files keyed by absolute path, in load order.
        is_module: Whether the package is a single module file rather
            than a directory. Modules have no sub-packages.
    """

    import_path: str
    name: str
    directory: str
    files: dict[str, SourceFile] = field(default_factory=dict)
    is_module: bool = False


@dataclass
class RawValue:
    """A group of constant or variable assignments sharing one comment."""

    doc: str
    nodes: list[ast.stmt]
    file: SourceFile
    names: list[str] = field(default_factory=list)


@dataclass
class RawFunction:
    """A function or method with its docstring."""

    doc: str
    name: str
    node: ast.FunctionDef | ast.AsyncFunctionDef
    file: SourceFile


@dataclass
class RawType:
    """A class with the values and functions associated with it."""

    doc: str
    name: str
    node: ast.ClassDef
    file: SourceFile
    consts: list[RawValue] = field(default_factory=list)
    vars: list[RawValue] = field(default_factory=list)
    funcs: list[RawFunction] = field(default_factory=list)
    methods: list[RawFunction] = field(default_factory=list)


@dataclass
class RawPackage:
    """Grouped declarations of a package, before normalization."""

    name: str
    import_path: str
    doc: str
    consts: list[RawValue] = field(default_factory=list)
    vars: list[RawValue] = field(default_factory=list)
    funcs: list[RawFunction] = field(default_factory=list)
    types: list[RawType] = field(default_factory=list)

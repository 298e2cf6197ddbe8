"""Documentation model returned to callers.

A ``Package`` is built once per invocation and never modified
afterwards. Every entity belongs to exactly one owning sequence, and
sequences keep source declaration order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from markupsafe import Markup

from pkgdoc.output.html import to_html


class Doc(str):
    """Raw documentation text."""

    __slots__ = ()

    def html(self) -> Markup:
        """Render the documentation as an escaped HTML fragment."""
        return to_html(self)


@dataclass(frozen=True)
class Value:
    """A constant or variable group.

    Attributes:
        doc: Doc comment of the group.
        decl: Canonical source text of the group.
    """

    doc: Doc
    decl: str

    def to_dict(self) -> dict[str, Any]:
        return {"doc": str(self.doc), "decl": self.decl}


@dataclass(frozen=True)
class Function:
    """A function or method.

    Attributes:
        doc: Docstring of the function.
        name: Function name.
        decl: Canonical signature.
    """

    doc: Doc
    name: str
    decl: str

    def to_dict(self) -> dict[str, Any]:
        return {"doc": str(self.doc), "name": self.name, "decl": self.decl}


@dataclass(frozen=True)
class Type:
    """A class and the declarations associated with it.

    Attributes:
        doc: Docstring of the class.
        name: Class name.
        decl: Canonical class header and class-level assignments.
        constants: Constant groups constructing or annotated with the class.
        variables: Variable groups constructing or annotated with the class.
        functions: Functions returning the class.
        methods: Methods defined in the class body.
    """

    doc: Doc
    name: str
    decl: str
    constants: tuple[Value, ...] = ()
    variables: tuple[Value, ...] = ()
    functions: tuple[Function, ...] = ()
    methods: tuple[Function, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "doc": str(self.doc),
            "name": self.name,
            "decl": self.decl,
            "constants": [v.to_dict() for v in self.constants],
            "variables": [v.to_dict() for v in self.variables],
            "functions": [f.to_dict() for f in self.functions],
            "methods": [f.to_dict() for f in self.methods],
        }


@dataclass(frozen=True)
class Package:
    """Documentation of a package.

    Attributes:
        name: Package name.
        import_path: Dotted import path.
        doc: Package docstring.
        synopsis: First sentence of the package docstring.
        constants: Top-level constant groups.
        variables: Top-level variable groups.
        functions: Top-level functions not associated with a class.
        types: Classes.
        sub_packages: Names of child directories holding source files,
            in directory listing order.
    """

    name: str
    import_path: str
    doc: Doc
    synopsis: str
    constants: tuple[Value, ...] = ()
    variables: tuple[Value, ...] = ()
    functions: tuple[Function, ...] = ()
    types: tuple[Type, ...] = ()
    sub_packages: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary.

        Returns:
            Dictionary representation of this package, suitable for JSON.
        """
        return {
            "name": self.name,
            "import_path": self.import_path,
            "doc": str(self.doc),
            "synopsis": self.synopsis,
            "constants": [v.to_dict() for v in self.constants],
            "variables": [v.to_dict() for v in self.variables],
            "functions": [f.to_dict() for f in self.functions],
            "types": [t.to_dict() for t in self.types],
            "sub_packages": list(self.sub_packages),
        }

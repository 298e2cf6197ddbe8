"""Conversion of raw grouped declarations into the documentation model.

Each declaration keeps its doc text verbatim and gets its canonical
source rendering. These are pure functions; nothing is read from or
written to disk.
"""

from typing import Iterable, Sequence

from pkgdoc.model import Doc, Function, Package, Type, Value
from pkgdoc.output.synopsis import synopsis
from pkgdoc.parsers.printer import render
from pkgdoc.parsers.structure import RawFunction, RawPackage, RawType, RawValue


def new_value(value: RawValue) -> Value:
    return Value(doc=Doc(value.doc), decl=render(value.nodes, value.file))


def new_function(func: RawFunction) -> Function:
    return Function(doc=Doc(func.doc), name=func.name, decl=render(func.node, func.file))


def new_type(raw_type: RawType, include_private: bool = False) -> Type:
    return Type(
        doc=Doc(raw_type.doc),
        name=raw_type.name,
        decl=render(raw_type.node, raw_type.file, include_private),
        constants=package_values(raw_type.consts),
        variables=package_values(raw_type.vars),
        functions=package_functions(raw_type.funcs),
        methods=package_functions(raw_type.methods),
    )


def package_values(values: Iterable[RawValue]) -> tuple[Value, ...]:
    return tuple(new_value(v) for v in values)


def package_functions(funcs: Iterable[RawFunction]) -> tuple[Function, ...]:
    return tuple(new_function(f) for f in funcs)


def package_types(types: Iterable[RawType], include_private: bool = False) -> tuple[Type, ...]:
    return tuple(new_type(t, include_private) for t in types)


def new_package(
    raw: RawPackage,
    sub_packages: Sequence[str] = (),
    include_private: bool = False,
) -> Package:
    """Build the documentation model of a package.

    Args:
        raw: Grouped declarations from the extractor.
        sub_packages: Names of discovered sub-packages.
        include_private: Whether private class attributes are rendered.

    Returns:
        The immutable package model.
    """
    return Package(
        name=raw.name,
        import_path=raw.import_path,
        doc=Doc(raw.doc),
        synopsis=synopsis(raw.doc),
        constants=package_values(raw.consts),
        variables=package_values(raw.vars),
        functions=package_functions(raw.funcs),
        types=package_types(raw.types, include_private),
        sub_packages=tuple(sub_packages),
    )

"""Declaration extractor.

Walks the parsed files of a package and groups their top-level
declarations into constants, variables, functions and classes. Values
and functions that belong to a class of the package are grouped under
that class: assignment blocks that construct or are annotated with the
class, functions returning it, and the methods defined in its body.
"""

import ast
import inspect
import logging
import re
from enum import Enum
from typing import Optional

from pkgdoc.parsers.structure import (
    LoadedPackage,
    RawFunction,
    RawPackage,
    RawType,
    RawValue,
    SourceFile,
)

logger = logging.getLogger(__name__)

_CONSTANT_NAME = re.compile(r"^_*[A-Z][A-Z0-9_]*$")
# Encoding declaration as matched by the interpreter.
_CODING = re.compile(r"^[ \t\f]*#.*?coding[:=][ \t]*[-\w.]+")

_FunctionNode = (ast.FunctionDef, ast.AsyncFunctionDef)


class ValueKind(str, Enum):
    """Kind of a module-level assignment group."""

    CONSTANT = "constant"
    VARIABLE = "variable"


def target_names(node: ast.stmt) -> Optional[list[str]]:
    """Return the names bound by a simple assignment statement.

    Only ``Assign`` and ``AnnAssign`` statements whose targets are plain
    names (or tuples of plain names) qualify.

    Returns:
        The bound names, or None if the statement is not a simple
        assignment.
    """
    if isinstance(node, ast.AnnAssign):
        targets = [node.target]
    elif isinstance(node, ast.Assign):
        targets = node.targets
    else:
        return None

    names: list[str] = []
    for target in targets:
        elts = target.elts if isinstance(target, (ast.Tuple, ast.List)) else [target]
        for elt in elts:
            if not isinstance(elt, ast.Name):
                return None
            names.append(elt.id)
    return names


def _is_final(annotation: ast.expr) -> bool:
    if isinstance(annotation, ast.Subscript):
        annotation = annotation.value
    if isinstance(annotation, ast.Name):
        return annotation.id == "Final"
    if isinstance(annotation, ast.Attribute):
        return annotation.attr == "Final"
    return False


def value_kind(node: ast.stmt, names: list[str]) -> ValueKind:
    """Classify an assignment as a constant or a variable."""
    if isinstance(node, ast.AnnAssign) and _is_final(node.annotation):
        return ValueKind.CONSTANT
    if all(_CONSTANT_NAME.match(name) for name in names):
        return ValueKind.CONSTANT
    return ValueKind.VARIABLE


def type_name(node: Optional[ast.expr]) -> Optional[str]:
    """Return the class name an annotation refers to, if it is a single one.

    Handles ``T``, ``"T"``, ``Final[T]``, ``Optional[T]`` and ``T | None``.
    """
    if node is None:
        return None
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        name = node.value.strip()
        return name if name.isidentifier() else None
    if isinstance(node, ast.Subscript):
        wrapper = node.value
        wrapper_name = wrapper.id if isinstance(wrapper, ast.Name) else getattr(wrapper, "attr", None)
        if wrapper_name in ("Optional", "Final"):
            return type_name(node.slice)
        return None
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        if isinstance(node.right, ast.Constant) and node.right.value is None:
            return type_name(node.left)
        if isinstance(node.left, ast.Constant) and node.left.value is None:
            return type_name(node.right)
    return None


def value_type(node: ast.stmt) -> Optional[str]:
    """Return the class an assignment is annotated with or constructs."""
    if isinstance(node, ast.AnnAssign):
        return type_name(node.annotation)
    value = getattr(node, "value", None)
    if isinstance(value, ast.Call) and isinstance(value.func, ast.Name):
        return value.func.id
    return None


def _is_magic_comment(source_file: SourceFile, line: int) -> bool:
    """Whether a line is a shebang or an encoding declaration."""
    if line > 2 or line > len(source_file.lines):
        return False
    text = source_file.lines[line - 1]
    return text.startswith("#!") or bool(_CODING.match(text))


def leading_comment(source_file: SourceFile, lineno: int) -> str:
    """Return the comment block that ends on the line above ``lineno``.

    Shebang and encoding lines at the top of a file are not doc text.
    """
    lines: list[str] = []
    current = lineno - 1
    while (
        current in source_file.comments
        and current not in source_file.inline
        and not _is_magic_comment(source_file, current)
    ):
        lines.append(source_file.comments[current])
        current -= 1
    return "\n".join(reversed(lines)).strip("\n")


def _string_statement(node: ast.stmt) -> Optional[str]:
    if (
        isinstance(node, ast.Expr)
        and isinstance(node.value, ast.Constant)
        and isinstance(node.value.value, str)
    ):
        return inspect.cleandoc(node.value.value)
    return None


def _first_line(node: ast.stmt) -> int:
    decorators = getattr(node, "decorator_list", None)
    if decorators:
        return decorators[0].lineno
    return node.lineno


class DeclarationExtractor:
    """Groups the declarations of a loaded package.

    Unexported names (those starting with an underscore) are skipped
    unless ``include_private`` is set.
    """

    def __init__(self, include_private: bool = False) -> None:
        self.include_private = include_private

    def extract(self, package: LoadedPackage) -> RawPackage:
        """Extract grouped declarations from a loaded package.

        Args:
            package: The package returned by the source loader.

        Returns:
            The raw grouped declarations, in source order.
        """
        files = list(package.files.values())
        raw = RawPackage(
            name=package.name,
            import_path=package.import_path,
            doc=self._package_doc(files),
        )

        types: dict[str, RawType] = {}
        for source_file in files:
            for node in source_file.tree.body:
                if not isinstance(node, ast.ClassDef) or not self._exported(node.name):
                    continue
                if node.name in types:
                    logger.debug(
                        "Skipping duplicate class %s in %s", node.name, source_file.path
                    )
                    continue
                types[node.name] = self._extract_type(node, source_file)
        raw.types = list(types.values())

        for source_file in files:
            for kind, value in self._value_groups(source_file):
                owner = types.get(self._group_type(value))
                if kind is ValueKind.CONSTANT:
                    (owner.consts if owner else raw.consts).append(value)
                else:
                    (owner.vars if owner else raw.vars).append(value)

            for node in source_file.tree.body:
                if not isinstance(node, _FunctionNode) or not self._exported(node.name):
                    continue
                func = self._extract_function(node, source_file)
                owner = types.get(type_name(node.returns))
                (owner.funcs if owner else raw.funcs).append(func)

        logger.debug(
            "Extracted %s: %d constants, %d variables, %d functions, %d types",
            raw.import_path,
            len(raw.consts),
            len(raw.vars),
            len(raw.funcs),
            len(raw.types),
        )
        return raw

    def _exported(self, name: str) -> bool:
        return self.include_private or not name.startswith("_")

    def _package_doc(self, files: list[SourceFile]) -> str:
        for source_file in files:
            doc = ast.get_docstring(source_file.tree)
            if doc:
                return doc
        return ""

    def _doc(
        self,
        node: ast.ClassDef | ast.FunctionDef | ast.AsyncFunctionDef,
        source_file: SourceFile,
    ) -> str:
        doc = ast.get_docstring(node)
        if doc:
            return doc
        return leading_comment(source_file, _first_line(node))

    def _extract_function(
        self,
        node: ast.FunctionDef | ast.AsyncFunctionDef,
        source_file: SourceFile,
    ) -> RawFunction:
        return RawFunction(
            doc=self._doc(node, source_file),
            name=node.name,
            node=node,
            file=source_file,
        )

    def _extract_type(self, node: ast.ClassDef, source_file: SourceFile) -> RawType:
        methods = [
            self._extract_function(item, source_file)
            for item in node.body
            if isinstance(item, _FunctionNode) and self._exported(item.name)
        ]
        return RawType(
            doc=self._doc(node, source_file),
            name=node.name,
            node=node,
            file=source_file,
            methods=methods,
        )

    def _group_type(self, value: RawValue) -> Optional[str]:
        """Return the class every statement of a group refers to, if any."""
        names = {value_type(node) for node in value.nodes}
        if len(names) == 1:
            return names.pop()
        return None

    def _value_groups(self, source_file: SourceFile) -> list[tuple[ValueKind, RawValue]]:
        """Split the top-level assignments of a file into groups.

        A group is a run of exported assignments of the same kind on
        adjacent lines. Its doc is the comment block above it, or else
        a string statement directly below it.
        """
        body = source_file.tree.body
        groups: list[tuple[ValueKind, RawValue]] = []
        current: list[ast.stmt] = []
        names: list[str] = []
        kind: Optional[ValueKind] = None

        def flush(next_index: int) -> None:
            if not current:
                return
            doc = leading_comment(source_file, current[0].lineno)
            if not doc and next_index < len(body):
                following = body[next_index]
                if following.lineno == current[-1].end_lineno + 1:
                    doc = _string_statement(following) or ""
            groups.append(
                (kind, RawValue(doc=doc, nodes=list(current), file=source_file, names=list(names)))
            )
            current.clear()
            names.clear()

        for index, node in enumerate(body):
            bound = target_names(node)
            if bound is None or not any(self._exported(name) for name in bound):
                flush(index)
                continue
            node_kind = value_kind(node, bound)
            if current and (
                node_kind is not kind or node.lineno != current[-1].end_lineno + 1
            ):
                flush(index)
            current.append(node)
            names.extend(bound)
            kind = node_kind
        flush(len(body))
        return groups

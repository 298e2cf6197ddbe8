"""Canonical declaration printer.

Renders declarations back to source text with ``ast.unparse``, so the
output does not depend on the original whitespace. Comments inside a
statement are re-attached from the comment table collected at load
time. Bodies are never printed: functions end in ``...`` and classes show only
their class-level assignments.
"""

import ast
import copy
import textwrap
from typing import Sequence, Union

from pkgdoc.parsers.extractor import target_names
from pkgdoc.parsers.structure import SourceFile

_INDENT = "    "

Renderable = Union[ast.stmt, Sequence[ast.stmt]]
_Definition = Union[ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef]


def _stub(node: _Definition) -> _Definition:
    stub = copy.copy(node)
    stub.body = [ast.Expr(value=ast.Constant(value=Ellipsis))]
    return stub


def _comment_follows(node: ast.stmt, line: str) -> bool:
    # Offsets are in UTF-8 bytes.
    rest = line.encode("utf-8")[node.end_col_offset or 0 :].decode("utf-8", "replace")
    return rest.lstrip(" \t;").startswith("#")


def statement_comments(node: ast.stmt, source_file: SourceFile) -> list[str]:
    """Return the comments inside a statement's line range.

    Comments on the inner lines of a multi-line statement belong to it.
    A comment on its last line belongs to it only when nothing but
    whitespace separates the two, so with ``a = 1; b = 2  # c`` the
    comment goes to ``b`` alone.
    """
    first = node.lineno
    last = node.end_lineno or first
    lines = source_file.lines
    found = []
    for line in range(first, last + 1):
        text = source_file.comments.get(line)
        if not text:
            continue
        if line == last and not _comment_follows(node, lines[line - 1] if line <= len(lines) else ""):
            continue
        found.append(text)
    return found


def trailing_comment(node: ast.stmt, source_file: SourceFile) -> str:
    """Return the comments of a statement joined into one line."""
    return "; ".join(statement_comments(node, source_file))


def render_statement(node: ast.stmt, source_file: SourceFile) -> str:
    """Render a single statement, keeping its trailing comment."""
    text = ast.unparse(node)
    comment = trailing_comment(node, source_file)
    if comment:
        text = f"{text}  # {comment}"
    return text


def render_function(node: ast.FunctionDef | ast.AsyncFunctionDef) -> str:
    """Render the decorators and signature of a function."""
    return ast.unparse(_stub(node))


def render_class(
    node: ast.ClassDef,
    source_file: SourceFile,
    include_private: bool = False,
) -> str:
    """Render a class header and its class-level assignments."""
    stub = ast.unparse(_stub(node))
    attributes = []
    for item in node.body:
        names = target_names(item)
        if names is None:
            continue
        if include_private or any(not name.startswith("_") for name in names):
            attributes.append(item)
    if not attributes:
        return stub

    header = stub.rsplit("\n", 1)[0]
    body = [
        textwrap.indent(render_statement(item, source_file), _INDENT)
        for item in attributes
    ]
    return "\n".join([header, *body])


def render(node: Renderable, source_file: SourceFile, include_private: bool = False) -> str:
    """Render a declaration to canonical source text.

    Args:
        node: A class, a function, a statement, or a sequence of
            statements forming a value group.
        source_file: The file the node was parsed from.
        include_private: Whether private class attributes are shown.

    Returns:
        The canonical text. Equal input always renders the same text,
        and rendering parsed output again reproduces it.
    """
    if isinstance(node, ast.ClassDef):
        return render_class(node, source_file, include_private)
    if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
        return render_function(node)
    if isinstance(node, ast.stmt):
        return render_statement(node, source_file)
    return "\n".join(render_statement(stmt, source_file) for stmt in node)

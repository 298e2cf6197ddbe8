"""Package source loader.

Resolves an import path against an ordered list of search roots and
parses every source file of the package with the ast module. Comments
are collected with tokenize so they can be re-attached when
declarations are rendered.
"""

import ast
import io
import logging
import os
import tokenize
from typing import Callable, Optional, Sequence

from pkgdoc.errors import PackageLoadError, PackageNotFoundError, SourceParseError
from pkgdoc.parsers.structure import LoadedPackage, SourceFile
from pkgdoc.utils.fs import FileSystem, OSFileSystem

logger = logging.getLogger(__name__)

ErrorHandler = Callable[[Exception], None]


def import_path_parts(import_path: str) -> list[str]:
    """Split an import path into its components.

    Both ``a.b.c`` and ``a/b/c`` are accepted.

    Raises:
        ValueError: If the path is empty or has an empty, ``.`` or
            ``..`` component.
    """
    parts = import_path.strip().replace("/", ".").split(".")
    if not import_path.strip() or any(p in ("", ".", "..") for p in parts):
        raise ValueError(f"invalid import path: {import_path!r}")
    return parts


def scan_comments(source: str) -> tuple[dict[int, str], set[int]]:
    """Collect comment text by line number.

    The ``#`` marker, an optional ``:`` (as in ``#:``) and one following
    space are removed.

    Returns:
        A mapping of line number to comment text, and the set of lines
        where the comment trails code.
    """
    comments: dict[int, str] = {}
    inline: set[int] = set()
    for tok in tokenize.generate_tokens(io.StringIO(source).readline):
        if tok.type != tokenize.COMMENT:
            continue
        text = tok.string[1:]
        if text.startswith(":"):
            text = text[1:]
        if text.startswith(" "):
            text = text[1:]
        line = tok.start[0]
        comments[line] = text.rstrip()
        if tok.line[: tok.start[1]].strip():
            inline.add(line)
    return comments, inline


class SourceLoader:
    """Loads and parses the source files of a package.

    Per-file read and syntax errors go to an error sink instead of
    aborting the load, so partially broken packages still produce
    documentation. Set ``suppress_errors`` to False to make them fatal.
    """

    def __init__(
        self,
        search_roots: Sequence[str],
        fs: Optional[FileSystem] = None,
        extension: str = ".py",
        suppress_errors: bool = True,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        """Initialize the loader.

        Args:
            search_roots: Directories tried in order when resolving.
            fs: File system to read from. Defaults to the real one.
            extension: Suffix identifying source files.
            suppress_errors: Whether per-file errors are passed to the
                error sink rather than raised.
            error_handler: Error sink used when errors are suppressed.
                Errors are discarded when None.
        """
        self.search_roots = list(search_roots)
        self.extension = extension
        self.suppress_errors = suppress_errors
        self._fs = fs or OSFileSystem()
        self._error_handler = error_handler

    def resolve(self, import_path: str) -> LoadedPackage:
        """Resolve an import path and parse the package sources.

        Args:
            import_path: Dotted (or slash separated) import path.

        Returns:
            The loaded package.

        Raises:
            PackageNotFoundError: If no search root holds the package, or
                the first directory found has no source files.
            PackageLoadError: If that directory cannot be listed.
            SourceParseError: If a file cannot be parsed and errors are
                not suppressed.
        """
        try:
            parts = import_path_parts(import_path)
        except ValueError as e:
            raise PackageNotFoundError(import_path, str(e)) from e

        dotted = ".".join(parts)
        directory, names, is_module = self._find(dotted, parts)

        package = LoadedPackage(
            import_path=dotted, name=parts[-1], directory=directory, is_module=is_module
        )
        for name in names:
            path = os.path.abspath(os.path.join(directory, name))
            source_file = self._parse(dotted, path)
            if source_file is not None:
                package.files[path] = source_file

        logger.info(
            "Loaded %s from %s (%d of %d files parsed)",
            dotted,
            directory,
            len(package.files),
            len(names),
        )
        return package

    def _find(self, import_path: str, parts: list[str]) -> tuple[str, list[str], bool]:
        """Find the first search root holding a package.

        A root holds the package when ``root/parts`` is a directory, or
        failing that when ``root/parts`` plus the extension is a file.
        The first directory found is final even if it has no sources,
        so the package and its sub-packages come from the same tree.

        Returns:
            The package directory, its source file names with
            ``__init__`` first and the rest sorted by name, and whether
            the package is a single module.
        """
        for root in self.search_roots:
            candidate = os.path.join(root, *parts)
            if self._fs.is_dir(candidate):
                return candidate, self._source_names(import_path, candidate), False
            module = candidate + self.extension
            if self._fs.is_file(module):
                logger.debug("Resolved %s to module %s", import_path, module)
                return os.path.dirname(module), [os.path.basename(module)], True

        roots = ", ".join(self.search_roots)
        raise PackageNotFoundError(
            import_path,
            f"cannot find package {import_path!r} in any of: {roots}",
        )

    def _source_names(self, import_path: str, directory: str) -> list[str]:
        try:
            entries = self._fs.list_dir(directory)
        except OSError as e:
            raise PackageLoadError(
                import_path, f"cannot list package directory {directory}: {e}"
            ) from e
        names = sorted(
            e.name for e in entries if not e.is_dir and e.name.endswith(self.extension)
        )
        if not names:
            raise PackageNotFoundError(
                import_path, f"no {self.extension} files in {directory}"
            )
        init = "__init__" + self.extension
        if init in names:
            names.remove(init)
            names.insert(0, init)
        return names

    def _parse(self, import_path: str, path: str) -> Optional[SourceFile]:
        try:
            source = self._fs.read_text(path)
            tree = ast.parse(source, filename=path)
            comments, inline = scan_comments(source)
        except (OSError, UnicodeDecodeError, SyntaxError, ValueError, tokenize.TokenError) as e:
            self._report(import_path, path, e)
            return None
        return SourceFile(path=path, source=source, tree=tree, comments=comments, inline=inline)

    def _report(self, import_path: str, path: str, error: Exception) -> None:
        if not self.suppress_errors:
            raise SourceParseError(import_path, path, f"{path}: {error}") from error
        if self._error_handler is not None:
            self._error_handler(error)

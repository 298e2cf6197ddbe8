"""Shared fixtures: package trees on disk and search roots."""

import textwrap
from pathlib import Path
from typing import Callable, Optional

import pytest

from pkgdoc.parsers.loader import SourceLoader
from pkgdoc.parsers.structure import LoadedPackage
from pkgdoc.utils.config import AppConfig, LoaderConfig, SearchConfig

PackageWriter = Callable[..., Path]


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Primary search root."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def stdlib(tmp_path: Path) -> Path:
    """Secondary search root."""
    root = tmp_path / "stdlib"
    root.mkdir()
    return root


@pytest.fixture
def write_package(workspace: Path) -> PackageWriter:
    """Write a package of dedented source files under a root.

    Usage: ``write_package("pkg.sub", {"__init__.py": "..."})``.
    """

    def _write(import_path: str, files: dict[str, str], root: Optional[Path] = None) -> Path:
        directory = (root or workspace).joinpath(*import_path.split("."))
        directory.mkdir(parents=True, exist_ok=True)
        for name, source in files.items():
            (directory / name).write_text(textwrap.dedent(source), encoding="utf-8")
        return directory

    return _write


@pytest.fixture
def load(workspace: Path, stdlib: Path) -> Callable[[str], LoadedPackage]:
    """Resolve a package with a default SourceLoader over both roots."""
    loader = SourceLoader([str(workspace), str(stdlib)])
    return loader.resolve


@pytest.fixture
def config(workspace: Path, stdlib: Path) -> AppConfig:
    """Configuration pointing at the temporary search roots."""
    return AppConfig(
        search=SearchConfig(workspace_root=str(workspace), stdlib_root=str(stdlib)),
        loader=LoaderConfig(),
    )

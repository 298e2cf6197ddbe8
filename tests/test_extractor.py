"""Tests for the declaration extractor."""

import ast
import textwrap
from typing import Callable

import pytest

from pkgdoc.parsers.extractor import (
    DeclarationExtractor,
    ValueKind,
    leading_comment,
    target_names,
    type_name,
    value_kind,
    value_type,
)
from pkgdoc.parsers.structure import RawPackage, SourceFile

SHAPES = '''\
    """Shapes for drawing."""

    import math

    # MAX_SIDES bounds polygon sizes.
    MAX_SIDES = 12
    MIN_SIDES = 3

    DEBUG = False

    registry = {}
    """Registry of shapes by name."""

    _cache = {}


    class Shape:
        """A shape."""

        sides: int = 0

        def area(self) -> float:
            """Area of the shape."""
            return 0.0

        def _helper(self):
            pass


    # Default shapes.
    UNIT = Shape()
    EMPTY = Shape()

    origin: Shape = Shape()


    def new_shape(sides: int) -> Shape:
        """Make a shape."""
        return Shape()


    def maybe_shape() -> Optional[Shape]:
        return None


    def scale(factor: float) -> float:
        """Scale a value."""
        return factor


    def _private():
        pass
'''


@pytest.fixture
def extract(write_package, load) -> Callable[..., RawPackage]:
    """Write a package, load it and extract its declarations."""

    def _extract(files: dict[str, str], include_private: bool = False) -> RawPackage:
        write_package("pkg", files)
        return DeclarationExtractor(include_private=include_private).extract(load("pkg"))

    return _extract


def _names(values) -> list[list[str]]:
    return [v.names for v in values]


class TestHelpers:
    """Tests for the module-level classification helpers."""

    def _stmt(self, source: str) -> ast.stmt:
        return ast.parse(source).body[0]

    def test_target_names_tuple(self) -> None:
        assert target_names(self._stmt("A, B = 1, 2")) == ["A", "B"]

    def test_target_names_attribute_is_not_value(self) -> None:
        assert target_names(self._stmt("obj.attr = 1")) is None

    def test_target_names_non_assignment(self) -> None:
        assert target_names(self._stmt("print(1)")) is None

    def test_upper_case_is_constant(self) -> None:
        node = self._stmt("MAX_SIZE = 1")
        assert value_kind(node, ["MAX_SIZE"]) is ValueKind.CONSTANT

    def test_final_is_constant(self) -> None:
        node = self._stmt("limit: Final[int] = 3")
        assert value_kind(node, ["limit"]) is ValueKind.CONSTANT

    def test_lower_case_is_variable(self) -> None:
        node = self._stmt("count = 0")
        assert value_kind(node, ["count"]) is ValueKind.VARIABLE

    @pytest.mark.parametrize(
        "annotation,expected",
        [
            ("Shape", "Shape"),
            ("'Shape'", "Shape"),
            ("Optional[Shape]", "Shape"),
            ("typing.Optional[Shape]", "Shape"),
            ("Shape | None", "Shape"),
            ("None | Shape", "Shape"),
            ("list[Shape]", None),
            ("tuple[int, str]", None),
        ],
    )
    def test_type_name(self, annotation: str, expected) -> None:
        assert type_name(ast.parse(annotation, mode="eval").body) == expected

    def test_value_type_from_call(self) -> None:
        assert value_type(self._stmt("X = Shape(1)")) == "Shape"

    def test_value_type_from_annotation(self) -> None:
        assert value_type(self._stmt("x: Shape = make()")) == "Shape"

    def test_value_type_literal(self) -> None:
        assert value_type(self._stmt("X = 1")) is None

    def test_leading_comment_stops_at_gap(self) -> None:
        source = "# unrelated\n\n# first\n# second\nX = 1\n"
        source_file = SourceFile(
            path="m.py",
            source=source,
            tree=ast.parse(source),
            comments={1: "unrelated", 3: "first", 4: "second"},
        )
        assert leading_comment(source_file, 5) == "first\nsecond"

    def test_leading_comment_ignores_inline(self) -> None:
        source = "Y = 2  # about Y\nX = 1\n"
        source_file = SourceFile(
            path="m.py",
            source=source,
            tree=ast.parse(source),
            comments={1: "about Y"},
            inline={1},
        )
        assert leading_comment(source_file, 2) == ""

    def test_leading_comment_skips_shebang(self) -> None:
        source = "#!/usr/bin/env python\nX = 1\n"
        source_file = SourceFile(
            path="m.py",
            source=source,
            tree=ast.parse(source),
            comments={1: "!/usr/bin/env python"},
        )
        assert leading_comment(source_file, 2) == ""

    def test_leading_comment_stops_at_coding_line(self) -> None:
        source = "#!/usr/bin/env python\n# -*- coding: utf-8 -*-\n# Answer.\nX = 1\n"
        source_file = SourceFile(
            path="m.py",
            source=source,
            tree=ast.parse(source),
            comments={1: "!/usr/bin/env python", 2: "-*- coding: utf-8 -*-", 3: "Answer."},
        )
        assert leading_comment(source_file, 4) == "Answer."

    def test_coding_like_comment_below_line_two_is_doc(self) -> None:
        source = "\n\n# coding=standard\nX = 1\n"
        source_file = SourceFile(
            path="m.py",
            source=source,
            tree=ast.parse(source),
            comments={3: "coding=standard"},
        )
        assert leading_comment(source_file, 4) == "coding=standard"


class TestExtract:
    """Tests for grouping a whole package."""

    def test_package_doc(self, extract) -> None:
        raw = extract({"__init__.py": SHAPES})
        assert raw.name == "pkg"
        assert raw.import_path == "pkg"
        assert raw.doc == "Shapes for drawing."

    def test_shebang_is_not_value_doc(self, extract) -> None:
        raw = extract({"__init__.py": "#!/usr/bin/env python\nVERSION = \"1\"\n"})
        assert _names(raw.consts) == [["VERSION"]]
        assert raw.consts[0].doc == ""

    def test_top_level_constants(self, extract) -> None:
        raw = extract({"__init__.py": SHAPES})
        assert _names(raw.consts) == [["MAX_SIDES", "MIN_SIDES"], ["DEBUG"]]
        assert raw.consts[0].doc == "MAX_SIDES bounds polygon sizes."
        assert raw.consts[1].doc == ""

    def test_top_level_variables(self, extract) -> None:
        raw = extract({"__init__.py": SHAPES})
        assert _names(raw.vars) == [["registry"]]
        assert raw.vars[0].doc == "Registry of shapes by name."

    def test_top_level_functions(self, extract) -> None:
        raw = extract({"__init__.py": SHAPES})
        assert [f.name for f in raw.funcs] == ["scale"]
        assert raw.funcs[0].doc == "Scale a value."

    def test_type_groups(self, extract) -> None:
        raw = extract({"__init__.py": SHAPES})
        assert [t.name for t in raw.types] == ["Shape"]
        shape = raw.types[0]
        assert shape.doc == "A shape."
        assert _names(shape.consts) == [["UNIT", "EMPTY"]]
        assert shape.consts[0].doc == "Default shapes."
        assert _names(shape.vars) == [["origin"]]
        assert [f.name for f in shape.funcs] == ["new_shape", "maybe_shape"]
        assert [m.name for m in shape.methods] == ["area"]

    def test_no_declaration_in_two_groups(self, extract) -> None:
        raw = extract({"__init__.py": SHAPES})
        functions = [f.name for f in raw.funcs]
        for raw_type in raw.types:
            functions += [f.name for f in raw_type.funcs + raw_type.methods]
        assert len(functions) == len(set(functions))

    def test_include_private(self, extract) -> None:
        raw = extract({"__init__.py": SHAPES}, include_private=True)
        assert "_private" in [f.name for f in raw.funcs]
        assert ["_cache"] in _names(raw.vars)
        assert "_helper" in [m.name for m in raw.types[0].methods]

    def test_kind_change_splits_group(self, extract) -> None:
        raw = extract({"mod.py": "A = 1\nb = 2\nC = 3\n"})
        assert _names(raw.consts) == [["A"], ["C"]]
        assert _names(raw.vars) == [["b"]]

    def test_values_attached_to_private_class_stay_top_level(self, extract) -> None:
        raw = extract({"mod.py": "class _Hidden:\n    pass\n\nH = _Hidden()\n"})
        assert raw.types == []
        assert _names(raw.consts) == [["H"]]

    def test_mixed_group_stays_top_level(self, extract) -> None:
        source = "class A:\n    pass\n\nclass B:\n    pass\n\nX = A()\nY = B()\n"
        raw = extract({"mod.py": source})
        assert _names(raw.consts) == [["X", "Y"]]
        assert all(not t.consts for t in raw.types)

    def test_function_comment_used_without_docstring(self, extract) -> None:
        source = "# Run does things.\n@decorated\ndef run():\n    pass\n"
        raw = extract({"mod.py": source})
        assert raw.funcs[0].doc == "Run does things."

    def test_files_in_load_order(self, extract) -> None:
        raw = extract(
            {
                "b.py": "def second():\n    pass\n",
                "a.py": "def first():\n    pass\n",
                "__init__.py": "def zeroth():\n    pass\n",
            }
        )
        assert [f.name for f in raw.funcs] == ["zeroth", "first", "second"]

    def test_doc_falls_back_to_first_module_docstring(self, extract) -> None:
        raw = extract({"__init__.py": "", "a.py": '"""From a."""\n'})
        assert raw.doc == "From a."

    def test_duplicate_class_keeps_first(self, extract) -> None:
        raw = extract(
            {
                "a.py": 'class Item:\n    """First."""\n',
                "b.py": 'class Item:\n    """Second."""\n',
            }
        )
        assert [t.doc for t in raw.types] == ["First."]

    def test_methods_from_class_body_only(self, extract) -> None:
        source = textwrap.dedent('''\
            class Node:
                def walk(self):
                    pass

                async def fetch(self):
                    pass

            def helper(node: Node) -> int:
                return 0
        ''')
        raw = extract({"mod.py": source})
        assert [m.name for m in raw.types[0].methods] == ["walk", "fetch"]
        assert [f.name for f in raw.funcs] == ["helper"]

"""Tests for the model normalizer."""

import ast
import textwrap

from pkgdoc.model import Doc
from pkgdoc.normalizer import new_function, new_package, new_type, new_value
from pkgdoc.parsers.loader import scan_comments
from pkgdoc.parsers.structure import RawFunction, RawPackage, RawType, RawValue, SourceFile

SOURCE = textwrap.dedent('''\
    class Color:
        """A color."""

        name: str = ""  # display name

        def hex(self) -> str:
            """Hex code."""
            return ""


    RED = Color()  # primary
    BLUE = Color()


    def mix(a: Color, b: Color) -> Color:
        return a
''')


def _source_file() -> SourceFile:
    comments, inline = scan_comments(SOURCE)
    return SourceFile(
        path="colors.py",
        source=SOURCE,
        tree=ast.parse(SOURCE),
        comments=comments,
        inline=inline,
    )


def _raw_package() -> RawPackage:
    source_file = _source_file()
    cls, red, blue, mix = source_file.tree.body
    method = cls.body[2]
    raw_type = RawType(
        doc="A color.",
        name="Color",
        node=cls,
        file=source_file,
        consts=[RawValue(doc="Colors.", nodes=[red, blue], file=source_file, names=["RED", "BLUE"])],
        funcs=[RawFunction(doc="", name="mix", node=mix, file=source_file)],
        methods=[RawFunction(doc="Hex code.", name="hex", node=method, file=source_file)],
    )
    return RawPackage(name="colors", import_path="art.colors", doc="Colors. Many.", types=[raw_type])


class TestNormalize:
    """Tests for converting raw declarations."""

    def test_value(self) -> None:
        raw = _raw_package().types[0].consts[0]
        value = new_value(raw)
        assert value.doc == "Colors."
        assert isinstance(value.doc, Doc)
        assert value.decl == "RED = Color()  # primary\nBLUE = Color()"

    def test_function(self) -> None:
        func = new_function(_raw_package().types[0].funcs[0])
        assert func.name == "mix"
        assert func.doc == ""
        assert func.decl == "def mix(a: Color, b: Color) -> Color:\n    ..."

    def test_type_recurses(self) -> None:
        color = new_type(_raw_package().types[0])
        assert color.decl == "class Color:\n    name: str = ''  # display name"
        assert [m.name for m in color.methods] == ["hex"]
        assert color.methods[0].decl == "def hex(self) -> str:\n    ..."
        assert len(color.constants) == 1
        assert color.variables == ()

    def test_package(self) -> None:
        package = new_package(_raw_package(), sub_packages=["dark", "light"])
        assert package.name == "colors"
        assert package.import_path == "art.colors"
        assert package.synopsis == "Colors."
        assert package.sub_packages == ("dark", "light")
        assert package.functions == ()

    def test_pure(self) -> None:
        raw = _raw_package()
        assert new_package(raw) == new_package(raw)

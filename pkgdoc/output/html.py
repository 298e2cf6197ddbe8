"""HTML rendering of doc text.

Doc text is plain text with a few conventions: paragraphs are separated
by blank lines, indented lines are preformatted, a lone capitalised
line between two paragraphs is a heading, and bare URLs are links.
All text is escaped; markup inside doc comments is never passed
through.
"""

import re
import textwrap

from markupsafe import Markup, escape

_URL = re.compile(r"(?:(?:https?|ftp|file)://|mailto:)[^\s<>\"'`]+")

_URL_TRAILING = ".,;:!?'\""

_HEADING_FORBIDDEN = set(";:!?+*/=[]{}_^°&§~%#@<\">\\")

_PARAGRAPH = "p"
_PRE = "pre"


def _indented(line: str) -> bool:
    return line[:1] in (" ", "\t")


def _trim_url(url: str) -> str:
    while url and (
        url[-1] in _URL_TRAILING or (url[-1] == ")" and url.count("(") < url.count(")"))
    ):
        url = url[:-1]
    return url


def _convert_quotes(text: str) -> str:
    return text.replace("``", "“").replace("''", "”")


def _inline(text: str) -> Markup:
    """Escape a run of text, turning bare URLs into links."""
    parts: list[Markup] = []
    pos = 0
    for match in _URL.finditer(text):
        url = _trim_url(match.group(0))
        if not url or url.endswith(("://", ":")):
            continue
        parts.append(escape(_convert_quotes(text[pos : match.start()])))
        parts.append(Markup('<a href="{0}">{0}</a>').format(url))
        pos = match.start() + len(url)
    parts.append(escape(_convert_quotes(text[pos:])))
    return Markup("").join(parts)


def heading_text(line: str) -> str:
    """Return the heading text of a line, or "" if it is not a heading."""
    line = line.strip()
    if not line or not line[0].isupper() or not line[-1].isalnum():
        return ""
    if any(char in _HEADING_FORBIDDEN for char in line):
        return ""
    index = line.find("'")
    while index >= 0:
        if line[index + 1 : index + 2] != "s" or line[index + 2 : index + 3].isalnum():
            return ""
        index = line.find("'", index + 1)
    return line


def anchor_id(text: str) -> str:
    return "hdr-" + "".join(char if char.isalnum() else "_" for char in text)


def blocks(text: str) -> list[tuple[str, list[str]]]:
    """Split doc text into paragraph and preformatted blocks."""
    lines = text.splitlines()
    result: list[tuple[str, list[str]]] = []
    index = 0
    while index < len(lines):
        line = lines[index]
        if not line.strip():
            index += 1
            continue
        end = index
        if _indented(line):
            while end < len(lines) and (not lines[end].strip() or _indented(lines[end])):
                end += 1
            while not lines[end - 1].strip():
                end -= 1
            result.append((_PRE, lines[index:end]))
        else:
            while end < len(lines) and lines[end].strip() and not _indented(lines[end]):
                end += 1
            result.append((_PARAGRAPH, lines[index:end]))
        index = end
    return result


def to_html(text: str) -> Markup:
    """Render doc text as an escaped HTML fragment.

    Args:
        text: Raw doc text.

    Returns:
        HTML safe for direct embedding in a page.
    """
    parsed = blocks(text)
    out: list[Markup] = []
    for index, (kind, lines) in enumerate(parsed):
        if kind == _PRE:
            code = textwrap.dedent("\n".join(lines))
            out.append(Markup("<pre>{0}\n</pre>\n").format(code))
            continue

        if (
            len(lines) == 1
            and 0 < index < len(parsed) - 1
            and parsed[index - 1][0] == _PARAGRAPH
            and parsed[index + 1][0] == _PARAGRAPH
        ):
            heading = heading_text(lines[0])
            if heading:
                out.append(
                    Markup('<h3 id="{0}">{1}</h3>\n').format(anchor_id(heading), _inline(heading))
                )
                continue

        body = Markup("").join(_inline(line.strip()) + Markup("\n") for line in lines)
        out.append(Markup("<p>\n") + body + Markup("</p>\n"))
    return Markup("").join(out)

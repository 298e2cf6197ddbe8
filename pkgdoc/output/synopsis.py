"""Synopsis extraction for doc text.

The synopsis is the first sentence of the first paragraph, with
whitespace collapsed to single spaces.
"""

import re

_ILLEGAL_PREFIXES = ("copyright", "all rights", "author")

_PARAGRAPH_BREAK = re.compile(r"\n[ \t]*\n")

_FULL_WIDTH_STOPS = ("。", "．")


def first_sentence_len(text: str) -> int:
    """Return the length of the first sentence of ``text``.

    A sentence ends after a period followed by whitespace, after an
    ideographic or full-width period, or at the end of the text.
    """
    previous = ""
    for index, char in enumerate(text):
        if previous == "." and char.isspace():
            return index
        if previous in _FULL_WIDTH_STOPS:
            return index
        previous = char
    return len(text)


def _convert_quotes(text: str) -> str:
    return text.replace("``", "“").replace("''", "”")


def synopsis(text: str) -> str:
    """Return the first sentence of a doc text.

    Texts that start like a license or authorship notice have no
    synopsis.

    Args:
        text: Raw doc text.

    Returns:
        The first sentence, or an empty string.
    """
    paragraph = _PARAGRAPH_BREAK.split(text.strip(), maxsplit=1)[0]
    sentence = " ".join(paragraph[: first_sentence_len(paragraph)].split())
    lowered = sentence.lower()
    if any(lowered.startswith(prefix) for prefix in _ILLEGAL_PREFIXES):
        return ""
    return _convert_quotes(sentence)

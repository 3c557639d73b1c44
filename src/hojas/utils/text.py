"""Text helpers shared by the lexer and the assembler.

Example:
    >>> from hojas.utils.text import slugify
    >>> slugify("Hello World!")
    'hello-world'
"""

from __future__ import annotations

import re

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATOR_RUN = re.compile(r"[-\s]+")


def slugify(text: str, separator: str = "-") -> str:
    """Convert heading text to a URL-safe slug.

    Unicode word characters are kept so that non-English headings still
    produce readable anchors.

    Args:
        text: Plain heading text
        separator: Character placed between words

    Returns:
        Lowercase slug, possibly empty.

    Examples:
        >>> slugify("Getting Started")
        'getting-started'
        >>> slugify("  What's new?  ")
        'whats-new'
        >>> slugify("Café crème")
        'café-crème'
        >>> slugify("***")
        ''
    """
    if not text:
        return ""

    text = text.lower().strip()
    text = _NON_WORD.sub("", text)
    text = _SEPARATOR_RUN.sub(separator, text)
    # Underscore is a word char; trim it like a separator at the edges
    return text.strip(separator + "_")


def normalize_newlines(source: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` line endings to ``\\n``."""
    if "\r" not in source:
        return source
    return source.replace("\r\n", "\n").replace("\r", "\n")


def expand_indent(line: str) -> tuple[int, int]:
    """Measure leading whitespace.

    Spaces count as one column, tabs advance to the next multiple of 4.

    Returns:
        (indent_columns, index_of_first_non_whitespace_char)
    """
    indent = 0
    pos = 0
    line_len = len(line)
    while pos < line_len:
        char = line[pos]
        if char == " ":
            indent += 1
        elif char == "\t":
            indent += 4 - (indent % 4)
        else:
            break
        pos += 1
    return indent, pos


def strip_columns(text: str, count: int) -> str:
    """Strip up to ``count`` columns of leading whitespace.

    A tab that straddles the boundary is split into the spaces left over.
    """
    col = 0
    pos = 0
    while pos < len(text) and col < count:
        char = text[pos]
        if char == " ":
            col += 1
            pos += 1
        elif char == "\t":
            expansion = 4 - (col % 4)
            if col + expansion <= count:
                col += expansion
                pos += 1
            else:
                needed = count - col
                return " " * (expansion - needed) + text[pos + 1 :]
        else:
            break
    return text[pos:]

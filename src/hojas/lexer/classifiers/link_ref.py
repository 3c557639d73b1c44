"""Link reference definition classifier mixin.

Definitions are single-line: ``[label]: url "title"``. The same pure parser
is used by the block parser to register the definition.
"""

from __future__ import annotations

import re

from hojas.tokens import Token, TokenType

_WHITESPACE_RUN = re.compile(r"\s+")

_TITLE_CLOSERS = {'"': '"', "'": "'", "(": ")"}


def normalize_label(label: str) -> str:
    """Case-fold and collapse whitespace so ``[Foo  Bar]`` matches ``[foo bar]``."""
    return _WHITESPACE_RUN.sub(" ", label.strip()).casefold()


def parse_link_reference_definition(content: str) -> tuple[str, str, str | None] | None:
    """Parse ``[label]: destination "optional title"``.

    Args:
        content: Line content with leading whitespace stripped

    Returns:
        (normalized_label, url, title) with escapes still in place, or None.
    """
    content = content.strip()
    if not content.startswith("[") or content.startswith("[^"):
        return None

    close = content.find("]:")
    if close < 2:
        return None

    label = content[1:close]
    if "[" in label.replace("\\[", "") or "]" in label.replace("\\]", ""):
        return None
    label = normalize_label(label)
    if not label:
        return None

    rest = content[close + 2 :].lstrip()
    if not rest:
        return None

    if rest.startswith("<"):
        end = rest.find(">")
        if end == -1:
            return None
        url = rest[1:end]
        if "<" in url:
            return None
        rest = rest[end + 1 :]
        if rest and not rest[0].isspace():
            return None
    else:
        parts = rest.split(None, 1)
        url = parts[0]
        rest = parts[1] if len(parts) > 1 else ""

    rest = rest.strip()
    if not rest:
        return label, url, None

    closer = _TITLE_CLOSERS.get(rest[0])
    if closer is None or len(rest) < 2 or rest[-1] != closer:
        return None
    return label, url, rest[1:-1]


class LinkRefClassifierMixin:
    """Mixin providing link reference definition classification."""

    def _make_token(
        self,
        token_type: TokenType,
        value: str,
        start_pos: int,
        *,
        end_pos: int | None = None,
        line_indent: int = 0,
    ) -> Token:
        """Create token for the current line. Implemented by Lexer."""
        raise NotImplementedError

    def _try_classify_link_reference_def(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        """Try to classify content as a link reference definition.

        Returns:
            LINK_REFERENCE_DEF token whose value is the raw line content.
        """
        if parse_link_reference_definition(content) is None:
            return None
        return self._make_token(
            TokenType.LINK_REFERENCE_DEF, content.strip(), line_start + indent, line_indent=indent
        )

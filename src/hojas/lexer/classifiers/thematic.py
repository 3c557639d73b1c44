"""Thematic break classifier mixin."""

from __future__ import annotations

from hojas.parsing.charsets import THEMATIC_BREAK_CHARS
from hojas.tokens import Token, TokenType


def is_thematic_break(content: str) -> bool:
    """3+ of the same ``-``, ``*`` or ``_`` with optional spaces/tabs between."""
    if not content or content[0] not in THEMATIC_BREAK_CHARS:
        return False

    char = content[0]
    count = 0
    for c in content:
        if c == char:
            count += 1
        elif c not in " \t":
            return False
    return count >= 3


class ThematicClassifierMixin:
    """Mixin providing thematic break classification."""

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

    def _try_classify_thematic_break(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        """Try to classify content as a horizontal rule."""
        if not is_thematic_break(content):
            return None
        return self._make_token(
            TokenType.THEMATIC_BREAK, content.rstrip(), line_start + indent, line_indent=indent
        )

"""Definition list marker classifier mixin."""

from __future__ import annotations

from hojas.tokens import Token, TokenType


def definition_text(content: str) -> str | None:
    """Text after a ``: `` definition marker, or None if not a marker line."""
    if len(content) < 3 or content[0] != ":" or content[1] not in " \t":
        return None
    text = content[2:].strip()
    return text or None


class DefinitionClassifierMixin:
    """Mixin providing ``: definition`` line classification.

    Whether the marker actually follows a term is decided by the block
    parser; an orphan marker line becomes paragraph text there.
    """

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

    def _try_classify_definition_marker(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        text = definition_text(content)
        if text is None:
            return None
        return self._make_token(
            TokenType.DEFINITION_MARKER, text, line_start + indent, line_indent=indent
        )

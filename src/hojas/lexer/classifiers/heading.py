"""ATX heading classifier mixin."""

from hojas.tokens import Token, TokenType


class HeadingClassifierMixin:
    """Mixin providing ATX heading classification."""

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

    def _try_classify_atx_heading(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        """Try to classify content as ATX heading.

        1-6 ``#`` followed by space, tab or end of line. A closing ``#``
        sequence is removed when preceded by a space.

        Returns:
            Token with value ``"## text"``, or None.
        """
        level = 0
        pos = 0
        while pos < len(content) and content[pos] == "#" and level < 7:
            level += 1
            pos += 1

        if level == 0 or level > 6:
            return None

        if pos < len(content) and content[pos] not in " \t":
            return None

        text = content[pos:].strip()

        if text.endswith("#"):
            trailing_start = len(text)
            while trailing_start > 0 and text[trailing_start - 1] == "#":
                trailing_start -= 1
            if trailing_start == 0:
                text = ""
            elif text[trailing_start - 1] in " \t":
                text = text[:trailing_start].rstrip()

        value = "#" * level + (" " + text if text else "")
        return self._make_token(TokenType.ATX_HEADING, value, line_start + indent, line_indent=indent)

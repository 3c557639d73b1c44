"""Fenced code block classifier mixin.

``fence_opener`` and ``is_closing_fence`` are pure so the block parser can
track fence state while collecting container lines.
"""

from __future__ import annotations

from hojas.lexer.modes import LexerMode
from hojas.parsing.charsets import FENCE_CHARS
from hojas.tokens import Token, TokenType


def fence_opener(content: str) -> tuple[str, int, str] | None:
    """Parse an opening fence.

    Args:
        content: Line content with leading whitespace stripped

    Returns:
        (fence_char, run_length, info_string) or None.
    """
    if not content or content[0] not in FENCE_CHARS:
        return None

    fence_char = content[0]
    count = 0
    while count < len(content) and content[count] == fence_char:
        count += 1

    if count < 3:
        return None

    info = content[count:].strip()
    # Backtick fences cannot have backticks in the info string
    if fence_char == "`" and "`" in info:
        return None
    return fence_char, count, info


def is_closing_fence(line: str, fence_char: str, fence_count: int) -> bool:
    """Whether ``line`` closes a fence of ``fence_char`` x ``fence_count``.

    The close may be indented up to 3 spaces, must use the same character
    with an equal or longer run, and may only be followed by whitespace.
    """
    indent = 0
    while indent < len(line) and line[indent] == " ":
        indent += 1
    if indent >= 4:
        return False

    content = line[indent:]
    count = 0
    while count < len(content) and content[count] == fence_char:
        count += 1
    if count < 3 or count < fence_count:
        return False
    return not content[count:].strip()


class FenceClassifierMixin:
    """Mixin providing fenced code block classification."""

    # These will be set by the Lexer class
    _fence_char: str
    _fence_count: int
    _fence_indent: int
    _mode: LexerMode

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

    def _try_classify_fence_start(
        self, content: str, line_start: int, indent: int = 0
    ) -> Token | None:
        """Try to classify content as a fence start and enter CODE_FENCE mode.

        Returns:
            FENCED_CODE_START token whose value is the fence run followed by
            the info string (``"```python"``), or None.
        """
        opener = fence_opener(content)
        if opener is None:
            return None

        fence_char, count, info = opener
        self._fence_char = fence_char
        self._fence_count = count
        self._fence_indent = indent
        self._mode = LexerMode.CODE_FENCE

        return self._make_token(
            TokenType.FENCED_CODE_START,
            fence_char * count + info,
            line_start + indent,
            line_indent=indent,
        )

    def _is_closing_fence(self, line: str) -> bool:
        """Check if ``line`` closes the currently open fence."""
        if not self._fence_char:
            return False
        return is_closing_fence(line, self._fence_char, self._fence_count)

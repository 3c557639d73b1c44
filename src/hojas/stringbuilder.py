"""StringBuilder for O(n) string accumulation.

Appends to a list, joins once at the end, instead of repeated string
concatenation. Used by the markdown renderer.

Thread Safety:
StringBuilder instances are local to each render call.
No shared mutable state.

"""

from __future__ import annotations


class StringBuilder:
    """Efficient string accumulator.

    Usage:
            >>> sb = StringBuilder()
            >>> sb.append("**").append("Hello").append("**").build()
            '**Hello**'

    """

    __slots__ = ("_parts",)

    def __init__(self) -> None:
        self._parts: list[str] = []

    def append(self, s: str) -> StringBuilder:
        """Append a string (empty strings are skipped); returns self for chaining."""
        if s:
            self._parts.append(s)
        return self

    def extend(self, strings: list[str]) -> StringBuilder:
        """Append multiple strings at once."""
        self._parts.extend(s for s in strings if s)
        return self

    def build(self) -> str:
        """Join all parts into the final string."""
        return "".join(self._parts)

    def __bool__(self) -> bool:
        return bool(self._parts)

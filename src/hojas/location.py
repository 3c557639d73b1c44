"""Source positions attached to tokens, nodes and diagnostics.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Where a node or token came from.

    Line and column are 1-indexed. ``offset``/``end_offset`` are absolute
    character offsets into the (newline-normalized) source of the parser
    that produced the node. Nodes produced inside containers (block quotes,
    list items, footnotes) keep correct line numbers, but their offsets are
    relative to the container content.

    Examples:
        >>> loc = SourceLocation(lineno=3, col_offset=5)
        >>> str(loc)
        '3:5'
        >>> str(SourceLocation(1, 1, source_file="guide.md"))
        'guide.md:1:1'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    def span_to(self, end: SourceLocation) -> SourceLocation:
        """Create a location running from this one to the end of ``end``."""
        return SourceLocation(
            lineno=self.lineno,
            col_offset=self.col_offset,
            offset=self.offset,
            end_offset=end.end_offset or end.offset,
            end_lineno=end.end_lineno or end.lineno,
            end_col_offset=end.end_col_offset or end.col_offset,
            source_file=self.source_file,
        )

    @classmethod
    def unknown(cls) -> SourceLocation:
        """Placeholder for synthetic nodes."""
        return cls(lineno=0, col_offset=0)

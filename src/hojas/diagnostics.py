"""Structured warnings attached to a parsed Document.

Recoverable problems (an unterminated fence, a footnote reference with no
definition, nesting past the configured depth) never raise. The parser
resolves them with a documented fallback and records a Diagnostic so the
host can surface it.

Thread Safety:
Diagnostic is frozen. DiagnosticSink is per-parse state and is never
shared between parse calls.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from hojas.location import SourceLocation
from hojas.utils.logger import get_logger

logger = get_logger(__name__)


class DiagnosticCode(StrEnum):
    """Kinds of recoverable problems."""

    UNTERMINATED_FENCE = "unterminated-fence"
    UNRESOLVED_FOOTNOTE = "unresolved-footnote"
    DUPLICATE_FOOTNOTE = "duplicate-footnote"
    UNRESOLVED_LINK_REFERENCE = "unresolved-link-reference"
    NESTING_LIMIT = "nesting-limit"


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """One recoverable problem found while parsing.

    Attributes:
        code: What went wrong
        message: Human-readable description
        location: Where it happened

    """

    code: DiagnosticCode
    message: str
    location: SourceLocation

    def __str__(self) -> str:
        return f"{self.location}: {self.code}: {self.message}"


@dataclass(slots=True)
class DiagnosticSink:
    """Collects diagnostics for one parse call.

    Shared by the block parser, its nested container parsers and the
    inline parser of the same document.
    """

    items: list[Diagnostic] = field(default_factory=list)

    def report(self, code: DiagnosticCode, message: str, location: SourceLocation) -> None:
        diagnostic = Diagnostic(code=code, message=message, location=location)
        logger.debug("%s", diagnostic)
        self.items.append(diagnostic)

    def freeze(self) -> tuple[Diagnostic, ...]:
        """Snapshot in report order."""
        return tuple(self.items)

    def __len__(self) -> int:
        return len(self.items)


__all__ = ["Diagnostic", "DiagnosticCode", "DiagnosticSink"]

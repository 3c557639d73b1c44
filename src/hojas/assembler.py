"""Assembles parsed blocks into a Document.

The block parser leaves inline text as InlineSpan placeholders and leaves
footnote definitions where they were written. Assembly:

1. moves every FootnoteDefinition out of the flow into ``Document.footnotes``
   (the first definition of an id wins, later ones are reported);
2. parses every InlineSpan, now that all link reference definitions are
   known, and turns footnote references without a definition into text;
3. assigns heading ids (explicit ``{#id}`` first, then slugs made unique
   with a numeric suffix);
4. builds the Document with its heading table and diagnostics.

Cross references stay lookups by id through the Document's side tables;
nodes never point at each other.

Thread Safety:
assemble() uses call-local state only.

"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence

from hojas.config import ParseConfig, get_parse_config
from hojas.diagnostics import DiagnosticCode, DiagnosticSink
from hojas.features import Feature
from hojas.location import SourceLocation
from hojas.nodes import (
    Block,
    Document,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    InlineSpan,
    Node,
    Text,
)
from hojas.parsing.inline import InlineParser, merge_text
from hojas.utils.logger import get_logger
from hojas.utils.text import slugify
from hojas.visitor import CHILD_FIELDS, BaseVisitor, plain_text, transform

logger = get_logger(__name__)

# Id for headings whose text has no slug-able characters
EMPTY_SLUG = "section"


class _HeadingCollector(BaseVisitor[None]):
    def __init__(self) -> None:
        self.headings: list[Heading] = []

    def visit_heading(self, node: Heading) -> None:
        self.headings.append(node)


def _collect_headings(root: Node) -> list[Heading]:
    collector = _HeadingCollector()
    collector.visit(root)
    return collector.headings


class _Assembler:
    """Single-use assembly state for one document."""

    def __init__(
        self,
        config: ParseConfig,
        link_refs: Mapping[str, tuple[str, str | None]],
        diagnostics: DiagnosticSink,
    ) -> None:
        self._config = config
        self._diagnostics = diagnostics
        self._inline = InlineParser(config, link_refs, diagnostics)
        self._footnotes: dict[str, FootnoteDefinition] = {}

    # -- Footnote definitions --------------------------------------------------

    def extract_footnotes(self, blocks: Sequence[Block]) -> tuple[Block, ...]:
        """Remove footnote definitions from the flow, at any depth."""
        return tuple(self._extract_from_sequence(blocks))  # type: ignore[arg-type]

    def _extract_from_sequence(self, nodes: Sequence[Node]) -> list[Node]:
        kept: list[Node] = []
        for node in nodes:
            if isinstance(node, FootnoteDefinition):
                self._register_footnote(node)
                continue
            kept.append(self._extract_from_node(node))
        return kept

    def _extract_from_node(self, node: Node) -> Node:
        fields = CHILD_FIELDS.get(type(node), ())
        if not fields:
            return node
        changes = {name: tuple(self._extract_from_sequence(getattr(node, name))) for name in fields}
        return dataclasses.replace(node, **changes)  # type: ignore[type-var]

    def _register_footnote(self, node: FootnoteDefinition) -> None:
        # Definitions nested in this one are hoisted as well
        inner = dataclasses.replace(
            node, children=tuple(self._extract_from_sequence(node.children))
        )
        if inner.identifier in self._footnotes:
            self._diagnostics.report(
                DiagnosticCode.DUPLICATE_FOOTNOTE,
                f"footnote [^{inner.identifier}] is already defined; this definition is ignored",
                inner.location,
            )
            return
        self._footnotes[inner.identifier] = inner

    # -- Inline content --------------------------------------------------------

    def resolve(self, node: Node) -> Node:
        """Replace InlineSpans below ``node`` with parsed inline nodes."""
        fields = CHILD_FIELDS.get(type(node), ())
        if not fields:
            return node
        changes = {name: self._resolve_sequence(getattr(node, name)) for name in fields}
        return dataclasses.replace(node, **changes)  # type: ignore[type-var]

    def _resolve_sequence(self, nodes: Sequence[Node]) -> tuple[Node, ...]:
        resolved: list[Node] = []
        for node in nodes:
            match node:
                case InlineSpan():
                    resolved.extend(self._resolve_sequence(self._parse_span(node)))
                case FootnoteReference(identifier=identifier) if identifier not in self._footnotes:
                    self._diagnostics.report(
                        DiagnosticCode.UNRESOLVED_FOOTNOTE,
                        f"footnote [^{identifier}] has no definition",
                        node.location,
                    )
                    resolved.append(Text(location=node.location, content=f"[^{identifier}]"))
                case _:
                    resolved.append(self.resolve(node))
        return merge_text(resolved)  # type: ignore[arg-type]

    def _parse_span(self, span: InlineSpan) -> tuple[Node, ...]:
        if span.literal:
            return (Text(location=span.location, content=span.raw),) if span.raw else ()
        return self._inline.parse(span.raw, span.location)

    def footnotes(self) -> tuple[FootnoteDefinition, ...]:
        return tuple(self.resolve(note) for note in self._footnotes.values())  # type: ignore[misc]

    # -- Heading ids -----------------------------------------------------------

    def assign_heading_ids(self, doc: Document) -> Document:
        """Give every heading a unique id.

        Explicit ids are reserved first, so an automatic slug never takes an
        id written explicitly further down. Collisions get ``-1``, ``-2``...
        """
        if not self._config.features.is_enabled(Feature.HEADING_ID):
            return doc

        headings = _collect_headings(doc)
        used: set[str] = {h.explicit_id for h in headings if h.explicit_id}
        explicit_seen: set[str] = set()
        assigned: dict[int, str] = {}

        for heading in headings:
            if heading.explicit_id and heading.explicit_id not in explicit_seen:
                explicit_seen.add(heading.explicit_id)
                assigned[id(heading)] = heading.explicit_id
                continue
            base = heading.explicit_id or slugify(plain_text(heading.children)) or EMPTY_SLUG
            candidate = base
            suffix = 1
            while candidate in used:
                candidate = f"{base}-{suffix}"
                suffix += 1
            used.add(candidate)
            assigned[id(heading)] = candidate

        def _with_id(node: Node) -> Node:
            if isinstance(node, Heading):
                return dataclasses.replace(node, id=assigned[id(node)])
            return node

        return transform(doc, _with_id)


def assemble(
    blocks: Sequence[Block],
    *,
    link_refs: Mapping[str, tuple[str, str | None]] | None = None,
    diagnostics: DiagnosticSink | None = None,
    source_file: str | None = None,
    source_len: int = 0,
) -> Document:
    """Build a Document from block parser output.

    Args:
        blocks: Top-level blocks, with InlineSpan placeholders
        link_refs: Link reference definitions collected by the block parser
        diagnostics: Sink holding block parser diagnostics (extended here)
        source_file: Optional source file path for the document location
        source_len: Length of the source, for the document location

    Returns:
        The assembled, immutable Document.
    """
    config = get_parse_config()
    sink = diagnostics if diagnostics is not None else DiagnosticSink()
    assembler = _Assembler(config, link_refs or {}, sink)

    flow = assembler.extract_footnotes(blocks)
    children = tuple(assembler.resolve(block) for block in flow)
    footnotes = assembler.footnotes()

    location = SourceLocation(
        lineno=1,
        col_offset=1,
        offset=0,
        end_offset=source_len,
        source_file=source_file,
    )
    doc = Document(location=location, children=children, footnotes=footnotes)  # type: ignore[arg-type]
    doc = assembler.assign_heading_ids(doc)
    doc = dataclasses.replace(
        doc,
        headings=tuple(_collect_headings(doc)),
        diagnostics=sink.freeze(),
    )

    logger.debug(
        "assembled document: %d blocks, %d footnotes, %d headings, %d diagnostics",
        len(doc.children),
        len(doc.footnotes),
        len(doc.headings),
        len(doc.diagnostics),
    )
    return doc

"""Tree visitor, bottom-up transform and plain-text extraction.

Example: collect all headings:

    class HeadingCollector(BaseVisitor[None]):
        def __init__(self) -> None:
            self.headings: list[Heading] = []

        def visit_heading(self, node: Heading) -> None:
            self.headings.append(node)

    collector = HeadingCollector()
    collector.visit(doc)

Example: shift heading levels:

    def shift_headings(node: Node) -> Node:
        if isinstance(node, Heading):
            return dataclasses.replace(node, level=min(node.level + 1, 6))
        return node

    new_doc = transform(doc, shift_headings)

Thread Safety:
    Visitors may accumulate mutable state; create one per thread. The
    transform function is pure and safe to call from any thread.

"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterable
from typing import Generic, TypeVar

from hojas.nodes import (
    BlockQuote,
    CodeBlock,
    CodeSpan,
    Definition,
    DefinitionItem,
    DefinitionList,
    Document,
    Emoji,
    Emphasis,
    FootnoteDefinition,
    FootnoteReference,
    Heading,
    Highlight,
    HorizontalRule,
    Image,
    LineBreak,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Subscript,
    Superscript,
    Table,
    TableCell,
    TableRow,
    Text,
)


def child_nodes(node: Node) -> tuple[Node, ...]:
    """Direct children of ``node`` in document order (empty for leaves)."""
    match node:
        case Document(children=children, footnotes=footnotes):
            return (*children, *footnotes)
        case List(items=items):
            return items
        case Table(head=head, body=body):
            return (*head, *body)
        case TableRow(cells=cells):
            return cells
        case DefinitionList(items=items):
            return items
        case DefinitionItem(term=term, definitions=definitions):
            return (*term, *definitions)
        case (
            Heading(children=children)
            | Paragraph(children=children)
            | BlockQuote(children=children)
            | ListItem(children=children)
            | TableCell(children=children)
            | Definition(children=children)
            | FootnoteDefinition(children=children)
            | Emphasis(children=children)
            | Strikethrough(children=children)
            | Highlight(children=children)
            | Subscript(children=children)
            | Superscript(children=children)
            | Link(children=children)
        ):
            return children
        case _:
            return ()


T = TypeVar("T")


class BaseVisitor(Generic[T]):
    """Base tree visitor with match-based dispatch.

    Subclass and override ``visit_*`` methods for node types you care about.
    Unhandled node types fall through to ``visit_default``. Children are
    walked automatically after the ``visit_*`` call.

    Type parameter ``T`` is the return type of visit methods (use ``None``
    for side-effect-only visitors).

    """

    def visit(self, node: Node) -> T:
        """Dispatch to the matching ``visit_*`` method, then walk children."""
        result = self._dispatch(node)
        for child in child_nodes(node):
            self.visit(child)
        return result

    def visit_default(self, node: Node) -> T:
        """Called for node types without a specific ``visit_*`` override."""
        return None  # type: ignore[return-value]

    # -- Block visitors --------------------------------------------------------

    def visit_document(self, node: Document) -> T:
        return self.visit_default(node)

    def visit_heading(self, node: Heading) -> T:
        return self.visit_default(node)

    def visit_paragraph(self, node: Paragraph) -> T:
        return self.visit_default(node)

    def visit_code_block(self, node: CodeBlock) -> T:
        return self.visit_default(node)

    def visit_block_quote(self, node: BlockQuote) -> T:
        return self.visit_default(node)

    def visit_list(self, node: List) -> T:
        return self.visit_default(node)

    def visit_list_item(self, node: ListItem) -> T:
        return self.visit_default(node)

    def visit_horizontal_rule(self, node: HorizontalRule) -> T:
        return self.visit_default(node)

    def visit_table(self, node: Table) -> T:
        return self.visit_default(node)

    def visit_table_row(self, node: TableRow) -> T:
        return self.visit_default(node)

    def visit_table_cell(self, node: TableCell) -> T:
        return self.visit_default(node)

    def visit_definition_list(self, node: DefinitionList) -> T:
        return self.visit_default(node)

    def visit_definition_item(self, node: DefinitionItem) -> T:
        return self.visit_default(node)

    def visit_definition(self, node: Definition) -> T:
        return self.visit_default(node)

    def visit_footnote_definition(self, node: FootnoteDefinition) -> T:
        return self.visit_default(node)

    # -- Inline visitors -------------------------------------------------------

    def visit_text(self, node: Text) -> T:
        return self.visit_default(node)

    def visit_emphasis(self, node: Emphasis) -> T:
        return self.visit_default(node)

    def visit_strikethrough(self, node: Strikethrough) -> T:
        return self.visit_default(node)

    def visit_highlight(self, node: Highlight) -> T:
        return self.visit_default(node)

    def visit_subscript(self, node: Subscript) -> T:
        return self.visit_default(node)

    def visit_superscript(self, node: Superscript) -> T:
        return self.visit_default(node)

    def visit_code_span(self, node: CodeSpan) -> T:
        return self.visit_default(node)

    def visit_link(self, node: Link) -> T:
        return self.visit_default(node)

    def visit_image(self, node: Image) -> T:
        return self.visit_default(node)

    def visit_emoji(self, node: Emoji) -> T:
        return self.visit_default(node)

    def visit_footnote_reference(self, node: FootnoteReference) -> T:
        return self.visit_default(node)

    def visit_line_break(self, node: LineBreak) -> T:
        return self.visit_default(node)

    def visit_soft_break(self, node: SoftBreak) -> T:
        return self.visit_default(node)

    # -- Internal dispatch -----------------------------------------------------

    def _dispatch(self, node: Node) -> T:
        """Match-based dispatch to visit_* methods."""
        match node:
            case Document():
                return self.visit_document(node)
            case Heading():
                return self.visit_heading(node)
            case Paragraph():
                return self.visit_paragraph(node)
            case CodeBlock():
                return self.visit_code_block(node)
            case BlockQuote():
                return self.visit_block_quote(node)
            case List():
                return self.visit_list(node)
            case ListItem():
                return self.visit_list_item(node)
            case HorizontalRule():
                return self.visit_horizontal_rule(node)
            case Table():
                return self.visit_table(node)
            case TableRow():
                return self.visit_table_row(node)
            case TableCell():
                return self.visit_table_cell(node)
            case DefinitionList():
                return self.visit_definition_list(node)
            case DefinitionItem():
                return self.visit_definition_item(node)
            case Definition():
                return self.visit_definition(node)
            case FootnoteDefinition():
                return self.visit_footnote_definition(node)
            case Text():
                return self.visit_text(node)
            case Emphasis():
                return self.visit_emphasis(node)
            case Strikethrough():
                return self.visit_strikethrough(node)
            case Highlight():
                return self.visit_highlight(node)
            case Subscript():
                return self.visit_subscript(node)
            case Superscript():
                return self.visit_superscript(node)
            case CodeSpan():
                return self.visit_code_span(node)
            case Link():
                return self.visit_link(node)
            case Image():
                return self.visit_image(node)
            case Emoji():
                return self.visit_emoji(node)
            case FootnoteReference():
                return self.visit_footnote_reference(node)
            case LineBreak():
                return self.visit_line_break(node)
            case SoftBreak():
                return self.visit_soft_break(node)
            case _:
                return self.visit_default(node)


def transform(doc: Document, fn: Callable[[Node], Node | None]) -> Document:
    """Apply ``fn`` to every node bottom-up, returning a new tree.

    Children are transformed first, then the parent is handed to ``fn``
    with its new children. Return ``None`` from ``fn`` to remove a node.
    The root Document cannot be removed; returning None for it raises
    TypeError.

    Args:
        doc: The document to transform.
        fn: Receives a node, returns a (possibly new) node or None.

    Returns:
        A new Document. The original tree is untouched.

    """
    result = _transform_node(doc, fn)
    if result is None or not isinstance(result, Document):
        msg = "transform fn must return a Document for the root (cannot remove root)"
        raise TypeError(msg)
    return result


def _transform_node(node: Node, fn: Callable[[Node], Node | None]) -> Node | None:
    return fn(_transform_children(node, fn))


def _transform_children(node: Node, fn: Callable[[Node], Node | None]) -> Node:
    """New node with every child field transformed; removed nodes are dropped."""

    def _filtered(children: tuple[Node, ...]) -> tuple[Node, ...]:
        return tuple(result for c in children if (result := _transform_node(c, fn)) is not None)

    changes: dict[str, tuple[Node, ...]] = {}
    for name in CHILD_FIELDS.get(type(node), ()):
        original = getattr(node, name)
        updated = _filtered(original)
        if len(updated) != len(original) or any(
            new is not old for new, old in zip(updated, original, strict=True)
        ):
            changes[name] = updated
    if changes:
        return dataclasses.replace(node, **changes)  # type: ignore[type-var]
    return node


# Node fields holding child nodes, per node type
CHILD_FIELDS: dict[type[Node], tuple[str, ...]] = {
    Document: ("children", "footnotes"),
    Heading: ("children",),
    Paragraph: ("children",),
    BlockQuote: ("children",),
    List: ("items",),
    ListItem: ("children",),
    Table: ("head", "body"),
    TableRow: ("cells",),
    TableCell: ("children",),
    DefinitionList: ("items",),
    DefinitionItem: ("term", "definitions"),
    Definition: ("children",),
    FootnoteDefinition: ("children",),
    Emphasis: ("children",),
    Strikethrough: ("children",),
    Highlight: ("children",),
    Subscript: ("children",),
    Superscript: ("children",),
    Link: ("children",),
}


def plain_text(nodes: Iterable[Node]) -> str:
    """Concatenate the visible text of inline nodes.

    Used for image alt text and heading slugs. Formatting is dropped,
    emoji contribute their glyph, breaks become a space.

    Example:
        >>> from hojas import parse_inline
        >>> plain_text(parse_inline("*a* `b` :smile:"))
        'a b 😄'
    """
    parts: list[str] = []
    for node in nodes:
        match node:
            case Text(content=content):
                parts.append(content)
            case CodeSpan(code=code):
                parts.append(code)
            case Emoji(glyph=glyph):
                parts.append(glyph)
            case Image(alt=alt):
                parts.append(alt)
            case LineBreak() | SoftBreak():
                parts.append(" ")
            case _:
                parts.append(plain_text(child_nodes(node)))
    return "".join(parts)


__all__ = ["CHILD_FIELDS", "BaseVisitor", "child_nodes", "plain_text", "transform"]

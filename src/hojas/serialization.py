"""Tree serialization: JSON round-trip for hojas nodes.

Converts typed nodes to/from JSON-compatible dicts. This is the contract a
rendering host consumes: every node dict carries ``_type`` (the variant
tag), its attributes, and its children in document order.

All output is deterministic (sorted keys) so equal trees give equal text.

Example:
    from hojas import parse
    from hojas.serialization import to_json, from_json

    doc = parse("# Hello **World**")
    json_str = to_json(doc)
    restored = from_json(json_str)
    assert doc == restored

Thread Safety:
    All functions are pure; safe to call from any thread.

"""

from __future__ import annotations

import json
from dataclasses import fields
from typing import Any

from hojas.diagnostics import Diagnostic, DiagnosticCode
from hojas.errors import SerializationError
from hojas.location import SourceLocation
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
    InlineSpan,
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

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {
    "Document": Document,
    "Heading": Heading,
    "Paragraph": Paragraph,
    "CodeBlock": CodeBlock,
    "BlockQuote": BlockQuote,
    "List": List,
    "ListItem": ListItem,
    "HorizontalRule": HorizontalRule,
    "Table": Table,
    "TableRow": TableRow,
    "TableCell": TableCell,
    "DefinitionList": DefinitionList,
    "DefinitionItem": DefinitionItem,
    "Definition": Definition,
    "FootnoteDefinition": FootnoteDefinition,
    "Text": Text,
    "Emphasis": Emphasis,
    "Strikethrough": Strikethrough,
    "Highlight": Highlight,
    "Subscript": Subscript,
    "Superscript": Superscript,
    "CodeSpan": CodeSpan,
    "Link": Link,
    "Image": Image,
    "Emoji": Emoji,
    "FootnoteReference": FootnoteReference,
    "LineBreak": LineBreak,
    "SoftBreak": SoftBreak,
    "InlineSpan": InlineSpan,
}


def to_dict(node: Node, *, include_location: bool = True) -> dict[str, Any]:
    """Convert a node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.
    Recursively serializes child nodes, diagnostics and SourceLocation
    objects.

    Args:
        node: Any hojas node.
        include_location: Drop ``location`` fields when False (for compact
            output or location-insensitive comparison).

    Returns:
        Dict with ``_type`` and all node fields.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        if f.name == "location" and not include_location:
            continue
        value = getattr(node, f.name)
        result[f.name] = _serialize_value(value, include_location)

    return result


def _serialize_value(value: Any, include_location: bool) -> Any:
    """Serialize a single field value."""
    if isinstance(value, Node):
        return to_dict(value, include_location=include_location)
    if isinstance(value, SourceLocation):
        return {
            "_type": "SourceLocation",
            "lineno": value.lineno,
            "col_offset": value.col_offset,
            "offset": value.offset,
            "end_offset": value.end_offset,
            "end_lineno": value.end_lineno,
            "end_col_offset": value.end_col_offset,
            "source_file": value.source_file,
        }
    if isinstance(value, Diagnostic):
        result: dict[str, Any] = {
            "_type": "Diagnostic",
            "code": str(value.code),
            "message": value.message,
        }
        if include_location:
            result["location"] = _serialize_value(value.location, include_location)
        return result
    if isinstance(value, tuple):
        return [_serialize_value(item, include_location) for item in value]
    # Primitives: str, int, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed node from a dict.

    Uses the ``_type`` discriminator to determine the node class.
    Recursively deserializes child nodes and SourceLocation objects. A
    missing ``location`` becomes ``SourceLocation.unknown()``.

    Args:
        data: Dict with ``_type`` and node fields (as produced by to_dict).

    Returns:
        Typed node (frozen dataclass).

    Raises:
        SerializationError: If ``_type`` is missing or unknown, or the
            fields do not fit the node class.

    """
    if not isinstance(data, dict):
        msg = f"Expected a node dict, got {type(data).__name__}"
        raise SerializationError(msg)

    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise SerializationError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise SerializationError(msg)

    kwargs: dict[str, Any] = {"location": SourceLocation.unknown()}
    for f in fields(node_cls):
        if f.name not in data:
            continue
        kwargs[f.name] = _deserialize_value(data[f.name])

    try:
        return node_cls(**kwargs)
    except TypeError as e:
        msg = f"Cannot rebuild {type_name}: {e}"
        raise SerializationError(msg) from e


def _deserialize_value(value: Any) -> Any:
    """Deserialize a single field value."""
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "SourceLocation":
            return SourceLocation(
                lineno=value["lineno"],
                col_offset=value["col_offset"],
                offset=value.get("offset", 0),
                end_offset=value.get("end_offset", 0),
                end_lineno=value.get("end_lineno"),
                end_col_offset=value.get("end_col_offset"),
                source_file=value.get("source_file"),
            )
        if type_name == "Diagnostic":
            try:
                code = DiagnosticCode(value["code"])
            except (KeyError, ValueError) as e:
                msg = f"Invalid diagnostic: {value!r}"
                raise SerializationError(msg) from e
            location = value.get("location")
            return Diagnostic(
                code=code,
                message=value.get("message", ""),
                location=(
                    _deserialize_value(location)
                    if location is not None
                    else SourceLocation.unknown()
                ),
            )
        return from_dict(value)
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None, include_location: bool = True) -> str:
    """Serialize a Document to a JSON string.

    Output is deterministic (sorted keys).

    Args:
        doc: Document to serialize.
        indent: JSON indentation level (None for compact).
        include_location: Keep ``location`` fields.

    Returns:
        JSON string.

    """
    return json.dumps(
        to_dict(doc, include_location=include_location),
        sort_keys=True,
        indent=indent,
        ensure_ascii=False,
    )


def from_json(data: str) -> Document:
    """Deserialize a Document from a JSON string.

    Args:
        data: JSON string (as produced by to_json).

    Returns:
        Document node.

    Raises:
        SerializationError: If the JSON is malformed or doesn't represent
            a Document.

    """
    try:
        raw = json.loads(data)
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON: {e}"
        raise SerializationError(msg) from e
    node = from_dict(raw)
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise SerializationError(msg)
    return node


__all__ = ["from_dict", "from_json", "to_dict", "to_json"]

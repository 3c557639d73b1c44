"""Renderer protocol: stable interface for node tree renderers.

Any renderer that implements ``render(doc) -> str`` conforms to this
protocol. The built-in ``MarkdownRenderer`` is the reference
implementation; UI hosts map nodes to their own primitives instead.

Example:
    from hojas.renderers.protocol import Renderer

    def export(renderer: Renderer, doc: Document) -> str:
        return renderer.render(doc)

"""

from typing import Protocol

from hojas.nodes import Document


class Renderer(Protocol):
    """Protocol for text renderers of a Document."""

    def render(self, doc: Document) -> str:
        """Render a Document to a string.

        Args:
            doc: The document to render.

        Returns:
            Rendered string output.

        """
        ...

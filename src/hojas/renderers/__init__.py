"""hojas renderers.

Renderers convert a Document back into text.

Available Renderers:
- MarkdownRenderer: Re-serializes a Document to markdown that parses back
  into a structurally equal tree

Thread Safety:
Renderer state is local to each render() call.
Safe for concurrent use from multiple threads.

"""

from hojas.renderers.markdown import MarkdownRenderer, render_markdown
from hojas.renderers.protocol import Renderer

__all__ = ["MarkdownRenderer", "Renderer", "render_markdown"]

"""Parsing subsystem for hojas.

Mixin classes, one grammar concern each:
- ``token_nav.TokenNavigationMixin``: block token stream traversal
- ``blocks.BlockParsingMixin``: block-level content (lists, tables, ...)
- ``inline.InlineParsingMixin``: inline content (delimiters, links, ...)

The block ``Parser`` (``hojas.parser``) and the ``InlineParser``
(``hojas.parsing.inline``) are composed from them. This package module
imports nothing so the lexer can use ``charsets`` without a cycle.

"""

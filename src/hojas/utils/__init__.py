"""Utility modules for hojas.

Provides:
- text: slugify, newline normalization, indentation helpers
- logger: get_logger for logging
"""

from hojas.utils.logger import get_logger
from hojas.utils.text import expand_indent, normalize_newlines, slugify, strip_columns

__all__ = [
    "expand_indent",
    "get_logger",
    "normalize_newlines",
    "slugify",
    "strip_columns",
]

"""Mode-specific scanners for the hojas lexer.

Each scanner is a mixin that provides scanning logic for one lexer mode
(BLOCK, CODE_FENCE).
"""

from __future__ import annotations

from hojas.lexer.scanners.block import BlockScannerMixin
from hojas.lexer.scanners.fence import FenceScannerMixin

__all__ = [
    "BlockScannerMixin",
    "FenceScannerMixin",
]

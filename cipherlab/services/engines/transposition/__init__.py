"""Transposition cipher engines."""

from cipherlab.services.engines.transposition.columnar import ColumnarEngine
from cipherlab.services.engines.transposition.block import BlockEngine
from cipherlab.services.engines.transposition.rail_fence import RailFenceEngine

__all__ = [
    "ColumnarEngine",
    "BlockEngine",
    "RailFenceEngine",
]

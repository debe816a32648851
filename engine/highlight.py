"""
highlight.py — Operation → Colour Tag
======================================
The one function the renderer needs from the engine: given the current
operation and a bar index, which colour role does that bar play?

Rules are checked in a fixed order and the first match wins:

    FOUND  >  COMPARE  >  SWAP  >  TRAVERSE  >  MOVE_POINTER  >  default

The renderer owns the actual colours (ui/canvas.py); the engine only
hands out tags.
"""

from enum import Enum
from typing import List, Optional, Tuple

from algorithms.operation import Operation, OperationKind


class ColorTag(Enum):
    FOUND    = "found"
    COMPARE  = "compare"
    SWAP     = "swap"
    TRAVERSE = "traverse"
    POINTER  = "pointer"
    DEFAULT  = "default"


PRECEDENCE: List[Tuple[OperationKind, ColorTag]] = [
    (OperationKind.FOUND,        ColorTag.FOUND),
    (OperationKind.COMPARE,      ColorTag.COMPARE),
    (OperationKind.SWAP,         ColorTag.SWAP),
    (OperationKind.TRAVERSE,     ColorTag.TRAVERSE),
    (OperationKind.MOVE_POINTER, ColorTag.POINTER),
]


def highlight_for(op: Optional[Operation], index: int) -> ColorTag:
    if op is None or not op.touches(index):
        return ColorTag.DEFAULT
    for kind, tag in PRECEDENCE:
        if op.kind == kind:
            return tag
    return ColorTag.DEFAULT


def highlight_row(op: Optional[Operation], size: int) -> List[ColorTag]:
    """Tags for positions 0..size-1 in one pass."""
    return [highlight_for(op, i) for i in range(size)]

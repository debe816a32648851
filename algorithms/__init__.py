"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every algorithm the visual lab knows about.

    from algorithms import REGISTRY, get_algorithm, generate_trace

REGISTRY is a dict:
    {
        "bubble_sort": AlgoInfo(key, label, fn, pseudocode, category, …),
        …
    }

AlgoInfo is a lightweight dataclass.  The engine and UI both consume it
so adding a new algorithm is literally: write the generator, add one
entry here.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from algorithms.operation import (
    Operation, OperationKind, Trace, TERMINAL_KINDS, describe,
)
from algorithms.bubble_sort   import bubble_sort   as _bubble,  PSEUDOCODE as _bubble_pc,  LINES as _bubble_ln
from algorithms.linear_search import linear_search as _linear,  PSEUDOCODE as _linear_pc,  LINES as _linear_ln
from algorithms.binary_search import binary_search as _binary,  PSEUDOCODE as _binary_pc,  LINES as _binary_ln
from algorithms.two_pointer   import two_pointer   as _pair,    PSEUDOCODE as _pair_pc,    LINES as _pair_ln
from algorithms.traverse      import traverse      as _walk,    PSEUDOCODE as _walk_pc,    LINES as _walk_ln


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:              str                    # registry key, e.g. "binary_search"
    label:            str                    # human label, e.g. "Binary Search"
    fn:               Callable               # the generator function
    pseudocode:       List[str]              # lines for the side-panel
    category:         str                    # UI tab: arrays / searching / sorting / twopointers
    lines:            Dict[OperationKind, int] = field(default_factory=dict)
    needs_target:     bool = False           # expose the target input?
    requires_sorted:  bool = False           # host must sort before snapshotting
    complexity_time:  str  = ""              # e.g. "O(log n)"
    complexity_space: str  = ""              # e.g. "O(1)"
    description:      str  = ""              # one-liner for the UI card

    def line_for(self, op: Optional[Operation]) -> int:
        """Pseudocode line for `op`, or -1 when nothing should be highlighted."""
        if op is None:
            return -1
        return self.lines.get(op.kind, -1)


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "traverse": AlgoInfo(
        key="traverse", label="Traverse", fn=_walk, pseudocode=_walk_pc, lines=_walk_ln,
        category="arrays",
        complexity_time="O(n)", complexity_space="O(1)",
        description="Visit every element once, left to right.",
    ),

    "linear_search": AlgoInfo(
        key="linear_search", label="Linear Search", fn=_linear, pseudocode=_linear_pc, lines=_linear_ln,
        category="searching", needs_target=True,
        complexity_time="O(n)", complexity_space="O(1)",
        description="Check each element in turn. Works on any array.",
    ),

    "binary_search": AlgoInfo(
        key="binary_search", label="Binary Search", fn=_binary, pseudocode=_binary_pc, lines=_binary_ln,
        category="searching", needs_target=True, requires_sorted=True,
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Halve the search range every probe. Needs a sorted array.",
    ),

    "bubble_sort": AlgoInfo(
        key="bubble_sort", label="Bubble Sort", fn=_bubble, pseudocode=_bubble_pc, lines=_bubble_ln,
        category="sorting",
        complexity_time="O(n²)", complexity_space="O(1)",
        description="Swap adjacent out-of-order pairs until nothing moves.",
    ),

    "two_pointer": AlgoInfo(
        key="two_pointer", label="Two-Pointer Pair Sum", fn=_pair, pseudocode=_pair_pc, lines=_pair_ln,
        category="twopointers", needs_target=True, requires_sorted=True,
        complexity_time="O(n)", complexity_space="O(1)",
        description="Walk two pointers inward to find a pair with the target sum.",
    ),
}

CATEGORIES: List[str] = ["arrays", "searching", "sorting", "twopointers"]


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_category(category: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if a.category == category]


# ---------------------------------------------------------------------------
# Trace generation
# ---------------------------------------------------------------------------
def generate_trace(
    algo_key: str,
    values: Sequence[float],
    target: Optional[float] = None,
) -> Trace:
    """
    Run `algo_key` over a snapshot of `values` and collect every Operation.

    Never raises for odd input (empty array, missing target).  Raises
    ValueError only for an unknown algorithm key.
    """
    info = get_algorithm(algo_key)
    if info is None:
        raise ValueError(f"Unknown algorithm: {algo_key}")

    snapshot = tuple(values)
    operations = tuple(info.fn(snapshot, target))
    trace = Trace(operations=operations, snapshot=snapshot, algo_key=algo_key, target=target)
    logger.debug(
        "generated %s trace: %d operations over %d values, terminal=%s",
        algo_key, len(trace), len(snapshot), trace.terminal.kind.value,
    )
    return trace


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "CATEGORIES",
    "Operation",
    "OperationKind",
    "Trace",
    "TERMINAL_KINDS",
    "describe",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_category",
    "generate_trace",
]

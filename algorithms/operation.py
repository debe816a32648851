"""
operation.py — Operations & Traces
===================================
Every algorithm is a generator that yields Operation objects.
An Operation is one atomic, classified event the visualizer animates:

    • Which kind of event happened (compare, swap, pointer move, …)
    • Which array positions it touches
    • An optional numeric payload (search target, running pair sum)

A Trace is the full, ordered, immutable list of Operations for one run,
together with the snapshot of the array it was built from.

Design decisions:
  - Operation and Trace are frozen dataclasses.  The generator is the only
    writer; the controller / renderer are pure readers.
  - A trace always ends in exactly one terminal operation (COMPLETE,
    FOUND or NOT_FOUND).  Trace() refuses anything else.
  - The snapshot travels with the trace so the renderer can replay swaps
    and show the array as it looked at any step.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple


# ---------------------------------------------------------------------------
# Operation kinds — closed vocabulary shared by every algorithm
# ---------------------------------------------------------------------------
class OperationKind(Enum):
    COMPARE      = "compare"
    SWAP         = "swap"
    INSERT       = "insert"
    DELETE       = "delete"
    TRAVERSE     = "traverse"
    FOUND        = "found"
    NOT_FOUND    = "not_found"
    MOVE_POINTER = "move_pointer"
    COMPLETE     = "complete"


TERMINAL_KINDS = frozenset({
    OperationKind.COMPLETE,
    OperationKind.FOUND,
    OperationKind.NOT_FOUND,
})


@dataclass(frozen=True)
class Operation:
    """
    Attributes:
        kind    : The OperationKind of this event.
        indices : Array positions involved, in meaningful order
                  (e.g. left, right, mid for binary search).
        value   : Optional numeric payload for COMPARE.
    """

    kind:    OperationKind
    indices: Tuple[int, ...]   = ()
    value:   Optional[float]   = None

    @property
    def is_terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS

    def touches(self, index: int) -> bool:
        return index in self.indices

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind":    self.kind.value,
            "indices": list(self.indices),
            "value":   self.value,
        }


# ---------------------------------------------------------------------------
# Shorthand constructors so generators read like the pseudocode
# ---------------------------------------------------------------------------
def compare(*indices: int, value: Optional[float] = None) -> Operation:
    return Operation(OperationKind.COMPARE, tuple(indices), value)


def swap(i: int, j: int) -> Operation:
    return Operation(OperationKind.SWAP, (i, j))


def move_pointer(*indices: int) -> Operation:
    return Operation(OperationKind.MOVE_POINTER, tuple(indices))


def traverse(i: int) -> Operation:
    return Operation(OperationKind.TRAVERSE, (i,))


def found(*indices: int) -> Operation:
    return Operation(OperationKind.FOUND, tuple(indices))


def not_found() -> Operation:
    return Operation(OperationKind.NOT_FOUND)


def complete() -> Operation:
    return Operation(OperationKind.COMPLETE)


# ---------------------------------------------------------------------------
# Trace
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Trace:
    """
    Attributes:
        operations : Ordered operations; the last one is the only terminal.
        snapshot   : The array values the trace was generated from.
        algo_key   : Registry key of the algorithm that produced it.
        target     : The search target / target sum, if any.
    """

    operations: Tuple[Operation, ...]
    snapshot:   Tuple[float, ...]      = ()
    algo_key:   str                    = ""
    target:     Optional[float]        = None

    def __post_init__(self):
        if not self.operations:
            raise ValueError("A trace needs at least one operation.")
        if not self.operations[-1].is_terminal:
            raise ValueError(
                f"Trace must end in a terminal operation, got {self.operations[-1].kind.value}."
            )
        if any(op.is_terminal for op in self.operations[:-1]):
            raise ValueError("Only the last operation of a trace may be terminal.")
        size = len(self.snapshot)
        for op in self.operations:
            for idx in op.indices:
                if not 0 <= idx < size:
                    raise ValueError(
                        f"{op.kind.value} references index {idx} outside 0..{size - 1}."
                    )

    def __len__(self) -> int:
        return len(self.operations)

    def __getitem__(self, idx: int) -> Operation:
        return self.operations[idx]

    def __iter__(self) -> Iterator[Operation]:
        return iter(self.operations)

    @property
    def terminal(self) -> Operation:
        return self.operations[-1]

    def count(self, kind: OperationKind) -> int:
        return sum(1 for op in self.operations if op.kind == kind)

    def array_at(self, step_index: int) -> List[float]:
        """
        The array as it looks after the operation at `step_index` ran:
        every SWAP up to and including that step is replayed against the
        snapshot.  step_index = -1 returns the untouched snapshot.
        """
        values = list(self.snapshot)
        last = min(step_index, len(self.operations) - 1)
        for op in self.operations[: last + 1]:
            if op.kind == OperationKind.SWAP:
                i, j = op.indices
                values[i], values[j] = values[j], values[i]
        return values

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algo_key":   self.algo_key,
            "target":     self.target,
            "snapshot":   list(self.snapshot),
            "operations": [op.to_dict() for op in self.operations],
        }


# ---------------------------------------------------------------------------
# Learning-mode text
# ---------------------------------------------------------------------------
def describe(op: Optional[Operation], values: Sequence[float]) -> str:
    """Plain-English one-liner for `op`, read against the displayed `values`."""
    if op is None:
        return ""

    shown = [_fmt(values[i]) for i in op.indices if 0 <= i < len(values)]
    kind = op.kind

    if kind == OperationKind.COMPARE:
        if len(shown) == 2 and op.value is not None:
            return f"Sum {shown[0]} + {shown[1]} = {_fmt(op.value)}"
        if len(shown) == 1 and op.value is not None:
            return f"Compare {shown[0]} with target {_fmt(op.value)}"
        if len(shown) == 2:
            return f"Compare {shown[0]} and {shown[1]}"
        if len(shown) == 1:
            return f"Check {shown[0]} (no target)"
        return "Compare"
    if kind == OperationKind.SWAP:
        return f"Swap positions {op.indices[0]} and {op.indices[1]}"
    if kind == OperationKind.MOVE_POINTER:
        names = ("left", "right", "mid") if len(op.indices) == 3 else (
            ("left", "right") if len(op.indices) == 2 else ("i",))
        return ", ".join(f"{n} = {i}" for n, i in zip(names, op.indices))
    if kind == OperationKind.TRAVERSE:
        return f"Visit index {op.indices[0]} (value {shown[0]})"
    if kind == OperationKind.FOUND:
        where = " and ".join(str(i) for i in op.indices)
        return f"🎯 Found at index {where}"
    if kind == OperationKind.NOT_FOUND:
        return "❌ Not found"
    if kind == OperationKind.COMPLETE:
        return "✅ Complete"
    if kind == OperationKind.INSERT:
        return f"Insert at index {op.indices[0]}" if op.indices else "Insert"
    if kind == OperationKind.DELETE:
        return f"Delete index {op.indices[0]}" if op.indices else "Delete"
    return kind.value


def _fmt(v: Any) -> str:
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v)

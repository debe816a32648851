"""
linear_search.py — Linear Search
=================================
Scans left to right.  For every index it yields a pointer move and a
comparison against the target, and stops at the first match.

No precondition on ordering.  A missing target (None) never matches, so
the whole array is scanned and the run ends in NOT_FOUND.
"""

from typing import Dict, Generator, List, Optional, Sequence

from algorithms.operation import (
    Operation, OperationKind, compare, move_pointer, found, not_found,
)


PSEUDOCODE: List[str] = [
    "def linear_search(a, target):",             # 0
    "    for i in 0 .. n-1:",                    # 1
    "        if a[i] == target:",                # 2
    "            return i",                      # 3
    "    return NOT FOUND",                      # 4
]

LINES: Dict[OperationKind, int] = {
    OperationKind.MOVE_POINTER: 1,
    OperationKind.COMPARE:      2,
    OperationKind.FOUND:        3,
    OperationKind.NOT_FOUND:    4,
}


def linear_search(
    values: Sequence[float],
    target: Optional[float] = None,
) -> Generator[Operation, None, None]:
    """
    Yields MOVE_POINTER([i]), COMPARE([i], value=target) per index, then
    FOUND([i]) at the first (lowest) match or NOT_FOUND() after the last index.
    """
    a = list(values)

    for i, v in enumerate(a):
        yield move_pointer(i)
        yield compare(i, value=target)
        if target is not None and v == target:
            yield found(i)
            return

    yield not_found()

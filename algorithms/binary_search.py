"""
binary_search.py — Binary Search
=================================
Classic halving search over an ascending array.

Precondition: `values` is sorted ascending.  Sorting is the caller's job;
the host sorts its array store before taking the snapshot.  On unsorted
input the trace is still well-formed, it just may report NOT_FOUND for a
value that is present.

A missing target (None) cannot be ordered against, so the run is a single
NOT_FOUND.
"""

from typing import Dict, Generator, List, Optional, Sequence

from algorithms.operation import (
    Operation, OperationKind, compare, move_pointer, found, not_found,
)


PSEUDOCODE: List[str] = [
    "def binary_search(a, target):",             # 0
    "    left, right ← 0, n-1",                  # 1
    "    while left <= right:",                  # 2
    "        mid ← (left + right) // 2",         # 3
    "        if a[mid] == target: return mid",   # 4
    "        elif a[mid] < target: left ← mid+1",   # 5
    "        else: right ← mid-1",               # 6
    "    return NOT FOUND",                      # 7
]

LINES: Dict[OperationKind, int] = {
    OperationKind.MOVE_POINTER: 3,
    OperationKind.COMPARE:      4,
    OperationKind.FOUND:        4,
    OperationKind.NOT_FOUND:    7,
}


def binary_search(
    values: Sequence[float],
    target: Optional[float] = None,
) -> Generator[Operation, None, None]:
    """
    Yields MOVE_POINTER([left, right, mid]) and COMPARE([mid], value=target)
    per probe, then FOUND([mid]) or NOT_FOUND().
    """
    a = list(values)

    if target is None:
        yield not_found()
        return

    left, right = 0, len(a) - 1
    while left <= right:
        mid = (left + right) // 2
        yield move_pointer(left, right, mid)
        yield compare(mid, value=target)

        if a[mid] == target:
            yield found(mid)
            return
        elif a[mid] < target:
            left = mid + 1
        else:
            right = mid - 1

    yield not_found()

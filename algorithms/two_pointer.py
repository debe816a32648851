"""
two_pointer.py — Two-Pointer Pair Sum
======================================
Looks for two positions whose values add up to `target` by walking a left
pointer up and a right pointer down an ascending array.

Precondition: `values` is sorted ascending (the caller sorts).
Each COMPARE carries the pair sum it just computed as its value, so the
renderer can show "a[left] + a[right] = sum" without redoing arithmetic.
"""

from typing import Dict, Generator, List, Optional, Sequence

from algorithms.operation import (
    Operation, OperationKind, compare, move_pointer, found, not_found,
)


PSEUDOCODE: List[str] = [
    "def pair_sum(a, target):",                  # 0
    "    left, right ← 0, n-1",                  # 1
    "    while left < right:",                   # 2
    "        s ← a[left] + a[right]",            # 3
    "        if s == target: return (left, right)",  # 4
    "        elif s < target: left ← left+1",    # 5
    "        else: right ← right-1",             # 6
    "    return NOT FOUND",                      # 7
]

LINES: Dict[OperationKind, int] = {
    OperationKind.MOVE_POINTER: 2,
    OperationKind.COMPARE:      3,
    OperationKind.FOUND:        4,
    OperationKind.NOT_FOUND:    7,
}


def two_pointer(
    values: Sequence[float],
    target: Optional[float] = None,
) -> Generator[Operation, None, None]:
    """
    Yields MOVE_POINTER([left, right]) and COMPARE([left, right], value=sum)
    per iteration, then FOUND([left, right]) or NOT_FOUND().
    """
    a = list(values)

    if target is None:
        yield not_found()
        return

    left, right = 0, len(a) - 1
    while left < right:
        yield move_pointer(left, right)
        s = a[left] + a[right]
        yield compare(left, right, value=s)

        if s == target:
            yield found(left, right)
            return
        elif s < target:
            left += 1
        else:
            right -= 1

    yield not_found()

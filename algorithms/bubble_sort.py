"""
bubble_sort.py — Bubble Sort
=============================
Generator-based bubble sort.  Yields an Operation at every event:
  1. Compare the adjacent pair (j, j+1)
  2. Swap them if they are out of order
  3. Final COMPLETE once every pass has run

Works on a private copy so the caller's array is never touched.  Later
comparisons see the copy as it is after earlier swaps.
"""

from typing import Dict, Generator, List, Optional, Sequence

from algorithms.operation import Operation, OperationKind, compare, swap, complete


# ---------------------------------------------------------------------------
# Pseudocode — each string is one displayed line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def bubble_sort(a):",                       # 0
    "    for i in 0 .. n-2:",                    # 1
    "        for j in 0 .. n-i-2:",              # 2
    "            if a[j] > a[j+1]:",             # 3
    "                swap(a[j], a[j+1])",        # 4
    "    return a",                              # 5
]

# which pseudocode line each kind of operation corresponds to
LINES: Dict[OperationKind, int] = {
    OperationKind.COMPARE:  3,
    OperationKind.SWAP:     4,
    OperationKind.COMPLETE: 5,
}


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def bubble_sort(
    values: Sequence[float],
    target: Optional[float] = None,
) -> Generator[Operation, None, None]:
    """
    Yields:
        COMPARE([j, j+1]) for every inner-loop iteration,
        SWAP([j, j+1]) for every inversion resolved,
        COMPLETE() at the end.

    `target` is accepted for signature symmetry and ignored.
    """
    a = list(values)
    n = len(a)

    for i in range(n - 1):
        for j in range(n - i - 1):
            yield compare(j, j + 1)
            if a[j] > a[j + 1]:
                yield swap(j, j + 1)
                a[j], a[j + 1] = a[j + 1], a[j]

    yield complete()

"""
traverse.py — Array Traversal
==============================
Visits every position once, left to right.  The simplest trace there is,
used on the Arrays tab to show what "O(n) access" looks like.
"""

from typing import Dict, Generator, List, Optional, Sequence

from algorithms.operation import Operation, OperationKind, traverse as visit, complete


PSEUDOCODE: List[str] = [
    "def traverse(a):",                          # 0
    "    for i in 0 .. n-1:",                    # 1
    "        visit(a[i])",                       # 2
    "    done",                                  # 3
]

LINES: Dict[OperationKind, int] = {
    OperationKind.TRAVERSE: 2,
    OperationKind.COMPLETE: 3,
}


def traverse(
    values: Sequence[float],
    target: Optional[float] = None,
) -> Generator[Operation, None, None]:
    for i in range(len(values)):
        yield visit(i)
    yield complete()

"""
metrics.py — Run Analytics
===========================
Summarises a finished Trace into the numbers the Analytics panel shows:
how many comparisons, swaps and pointer moves the run needed, how long
generation took, and how it ended.

Usage:
    rec = Recorder()
    trace = rec.record("binary_search", [1, 3, 5, 7, 9], target=7)
    rec.metrics.comparisons      # 2
    rec.export()                 # trace + metrics, served by /api/export
"""

import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from algorithms import get_algorithm, generate_trace
from algorithms.operation import OperationKind, Trace


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str   = ""
    algo_label:    str   = ""
    array_size:    int   = 0
    target:        Optional[float] = None
    total_steps:   int   = 0          # number of operations in the trace
    comparisons:   int   = 0
    swaps:         int   = 0
    pointer_moves: int   = 0
    visits:        int   = 0          # TRAVERSE operations
    outcome:       str   = ""         # "complete" / "found" / "not_found"
    found_indices: List[int] = field(default_factory=list)
    wall_time_ms:  float = 0.0        # wall-clock time to generate the trace
    complexity:    str   = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def summarize(trace: Trace, wall_time_ms: float = 0.0) -> RunMetrics:
    info = get_algorithm(trace.algo_key)
    last = trace.terminal
    return RunMetrics(
        algo_key=trace.algo_key,
        algo_label=info.label if info else trace.algo_key,
        array_size=len(trace.snapshot),
        target=trace.target,
        total_steps=len(trace),
        comparisons=trace.count(OperationKind.COMPARE),
        swaps=trace.count(OperationKind.SWAP),
        pointer_moves=trace.count(OperationKind.MOVE_POINTER),
        visits=trace.count(OperationKind.TRAVERSE),
        outcome=last.kind.value,
        found_indices=list(last.indices) if last.kind == OperationKind.FOUND else [],
        wall_time_ms=round(wall_time_ms, 3),
        complexity=info.complexity_time if info else "",
    )


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        trace   : The last recorded Trace.
        metrics : RunMetrics for that trace.
    """

    def __init__(self):
        self.trace:   Optional[Trace]      = None
        self.metrics: Optional[RunMetrics] = None

    def record(
        self,
        algo_key: str,
        values: Sequence[float],
        target: Optional[float] = None,
    ) -> Trace:
        """Generate the trace, time it and compute metrics."""
        start = time.perf_counter()
        trace = generate_trace(algo_key, values, target)
        wall_ms = (time.perf_counter() - start) * 1000

        self.trace = trace
        self.metrics = summarize(trace, wall_ms)
        return trace

    def export(self) -> Dict[str, Any]:
        if self.trace is None:
            return {}
        data = self.trace.to_dict()
        data["metrics"] = self.metrics.to_dict() if self.metrics else {}
        return data

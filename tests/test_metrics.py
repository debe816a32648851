"""Tests for run analytics."""

from __future__ import annotations

from algorithms import generate_trace
from engine import Recorder, summarize


class TestSummarize:
    def test_bubble_sort_counts(self):
        m = summarize(generate_trace("bubble_sort", [5, 3, 1]))
        assert m.algo_label == "Bubble Sort"
        assert m.array_size == 3
        assert m.comparisons == 3
        assert m.swaps == 3
        assert m.total_steps == 7
        assert m.outcome == "complete"
        assert m.found_indices == []

    def test_binary_search_found(self):
        m = summarize(generate_trace("binary_search", [1, 3, 5, 7, 9], target=7))
        assert m.pointer_moves == 2
        assert m.comparisons == 2
        assert m.outcome == "found"
        assert m.found_indices == [3]
        assert m.target == 7
        assert m.complexity == "O(log n)"

    def test_not_found(self):
        m = summarize(generate_trace("linear_search", [1, 2], target=9))
        assert m.outcome == "not_found"
        assert m.comparisons == 2


class TestRecorder:
    def test_record_and_export(self):
        rec = Recorder()
        assert rec.export() == {}
        trace = rec.record("traverse", [4, 5])
        assert rec.trace is trace
        assert rec.metrics.visits == 2
        assert rec.metrics.wall_time_ms >= 0
        data = rec.export()
        assert data["algo_key"] == "traverse"
        assert data["snapshot"] == [4, 5]
        assert len(data["operations"]) == 3
        assert data["metrics"]["visits"] == 2

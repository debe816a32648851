"""Tests for linear search, binary search and two-pointer pair sum."""

from __future__ import annotations

import math

from algorithms import generate_trace
from algorithms.operation import OperationKind, compare, move_pointer, found, not_found


def assert_in_bounds(trace):
    for op in trace:
        for idx in op.indices:
            assert 0 <= idx < len(trace.snapshot)


class TestLinearSearch:
    def test_finds_first_match(self):
        trace = generate_trace("linear_search", [4, 9, 2, 9], target=9)
        assert list(trace) == [
            move_pointer(0), compare(0, value=9),
            move_pointer(1), compare(1, value=9),
            found(1),
        ]

    def test_absent_scans_everything(self):
        values = [4, 9, 2]
        trace = generate_trace("linear_search", values, target=7)
        assert trace.count(OperationKind.COMPARE) == len(values)
        assert trace.terminal == not_found()

    def test_empty_array(self):
        assert list(generate_trace("linear_search", [], target=3)) == [not_found()]

    def test_missing_target(self):
        trace = generate_trace("linear_search", [1, 2], target=None)
        assert trace.count(OperationKind.COMPARE) == 2
        assert trace.terminal == not_found()


class TestBinarySearch:
    def test_finds_seven(self):
        trace = generate_trace("binary_search", [1, 3, 5, 7, 9], target=7)
        assert list(trace) == [
            move_pointer(0, 4, 2), compare(2, value=7),
            move_pointer(3, 4, 3), compare(3, value=7),
            found(3),
        ]

    def test_absent_target(self):
        trace = generate_trace("binary_search", [1, 3, 5, 7, 9], target=4)
        assert trace.terminal == not_found()
        assert_in_bounds(trace)

    def test_every_present_value_is_found(self):
        values = [2, 4, 8, 16, 32, 64, 128]
        for idx, v in enumerate(values):
            trace = generate_trace("binary_search", values, target=v)
            assert trace.terminal == found(idx)

    def test_logarithmic_probes(self):
        values = list(range(0, 200, 2))
        for target in (-1, 0, 51, 198, 199, 500):
            trace = generate_trace("binary_search", values, target=target)
            probes = trace.count(OperationKind.COMPARE)
            assert probes <= math.floor(math.log2(len(values))) + 1
            assert_in_bounds(trace)
            if trace.terminal.kind == OperationKind.FOUND:
                assert values[trace.terminal.indices[0]] == target

    def test_empty_and_missing_target(self):
        assert list(generate_trace("binary_search", [], target=3)) == [not_found()]
        assert list(generate_trace("binary_search", [1, 2, 3], target=None)) == [not_found()]


class TestTwoPointer:
    def test_finds_pair(self):
        trace = generate_trace("two_pointer", [1, 2, 4, 7, 11], target=9)
        assert list(trace) == [
            move_pointer(0, 4), compare(0, 4, value=12),
            move_pointer(0, 3), compare(0, 3, value=8),
            move_pointer(1, 3), compare(1, 3, value=9),
            found(1, 3),
        ]

    def test_found_pair_really_sums(self):
        values = [11, 12, 22, 25, 34, 64, 90]
        for target in (23, 56, 99, 154):
            trace = generate_trace("two_pointer", values, target=target)
            if trace.terminal.kind == OperationKind.FOUND:
                i, j = trace.terminal.indices
                assert i < j
                assert values[i] + values[j] == target

    def test_absent_pair_is_linear(self):
        values = list(range(10))
        trace = generate_trace("two_pointer", values, target=100)
        assert trace.terminal == not_found()
        assert trace.count(OperationKind.COMPARE) <= len(values) - 1
        assert_in_bounds(trace)

    def test_degenerate_inputs(self):
        assert list(generate_trace("two_pointer", [], target=3)) == [not_found()]
        assert list(generate_trace("two_pointer", [3], target=3)) == [not_found()]
        assert list(generate_trace("two_pointer", [1, 2], target=None)) == [not_found()]

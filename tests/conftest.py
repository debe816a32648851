"""Shared fixtures: a hand-driven clock and a scheduler bound to it."""

from __future__ import annotations

import pytest

from engine import Scheduler


class FakeClock:
    """Callable clock returning milliseconds; tests move it with advance()."""

    def __init__(self, start: int = 0):
        self.ms = start

    def __call__(self) -> float:
        return self.ms

    def advance(self, ms: int) -> None:
        self.ms += ms


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock) -> Scheduler:
    return Scheduler(clock=clock)

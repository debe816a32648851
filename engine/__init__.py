"""
engine/
-------
Playback, timing & analytics layer.

    from engine import PlaybackController, Scheduler, highlight_for, Recorder
"""

from engine.scheduler  import Scheduler, TimerHandle
from engine.controller import (
    PlaybackController,
    PlaybackPhase,
    PlaybackSnapshot,
    SPEED_PRESETS,
    DEFAULT_SPEED_MS,
    MIN_SPEED_MS,
)
from engine.highlight  import ColorTag, highlight_for, highlight_row
from engine.metrics    import Recorder, RunMetrics, summarize

__all__ = [
    "Scheduler",
    "TimerHandle",
    "PlaybackController",
    "PlaybackPhase",
    "PlaybackSnapshot",
    "SPEED_PRESETS",
    "DEFAULT_SPEED_MS",
    "MIN_SPEED_MS",
    "ColorTag",
    "highlight_for",
    "highlight_row",
    "Recorder",
    "RunMetrics",
    "summarize",
]

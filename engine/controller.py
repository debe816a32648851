"""
controller.py — Timed Trace Playback
=====================================
The PlaybackController is the ONLY object the host interacts with during
a run.  It owns one Trace, a step index into it, the playback speed and a
single pending timer, and exposes a small play/pause/reset/speed API.

State machine (derived from step_index / running, never stored):
    IDLE     →  play()            →  PLAYING
    PAUSED   →  play()            →  PLAYING
    PLAYING  →  pause()           →  PAUSED
    PLAYING  →  (last step shown) →  FINISHED
    any      →  reset()           →  IDLE
    any      →  load_trace()      →  PLAYING at step 0 (or IDLE with autoplay=False)

Timing:
  Auto-advance is one outstanding TimerHandle at a time.  Every state
  change (pause, reset, set_speed, load_trace, invalidate) cancels the
  pending handle before it touches state, so a stale callback can never
  move a trace that was just reset or replaced.

Rejected commands (play with no trace, pause while not playing, …) are
no-ops: they return False, leave state alone and are logged.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from algorithms.operation import Operation, Trace
from engine.scheduler import Scheduler, TimerHandle


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Phases
# ---------------------------------------------------------------------------
class PlaybackPhase(Enum):
    IDLE     = "idle"
    PLAYING  = "playing"
    PAUSED   = "paused"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step) — the three options of the speed picker
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, int] = {
    "slow":   1000,
    "normal": 500,
    "fast":   200,
}

DEFAULT_SPEED_MS = SPEED_PRESETS["normal"]
MIN_SPEED_MS = 20


@dataclass(frozen=True)
class PlaybackSnapshot:
    step_index: int
    total:      int
    running:    bool
    phase:      PlaybackPhase
    speed_ms:   int

    def to_dict(self) -> Dict[str, object]:
        return {
            "step_index": self.step_index,
            "total":      self.total,
            "running":    self.running,
            "phase":      self.phase.value,
            "speed_ms":   self.speed_ms,
        }


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        trace      : The loaded Trace (None until load_trace()).
        step_index : Index of the operation currently shown; -1 = not started.
        speed_ms   : Milliseconds between auto-advance ticks.
        running    : True while auto-advancing.
        message    : Free-form annotation the host shows under the bars.
        on_step    : Optional callback(Operation) fired whenever the shown
                     step changes.  The host hooks its re-render here.
    """

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        speed_ms: int = DEFAULT_SPEED_MS,
        on_step: Optional[Callable[[Optional[Operation]], None]] = None,
    ):
        self.scheduler:  Scheduler        = scheduler or Scheduler()
        self.trace:      Optional[Trace]  = None
        self.step_index: int              = -1
        self.speed_ms:   int              = max(MIN_SPEED_MS, int(speed_ms))
        self.running:    bool             = False
        self.message:    str              = ""
        self.on_step = on_step

        self._pending: Optional[TimerHandle] = None

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------
    @property
    def total(self) -> int:
        return len(self.trace) if self.trace is not None else 0

    @property
    def phase(self) -> PlaybackPhase:
        if self.trace is not None and self.step_index == self.total - 1:
            return PlaybackPhase.FINISHED
        if self.running:
            return PlaybackPhase.PLAYING
        if self.step_index == -1:
            return PlaybackPhase.IDLE
        return PlaybackPhase.PAUSED

    @property
    def is_playing(self) -> bool:
        return self.phase == PlaybackPhase.PLAYING

    @property
    def has_pending_tick(self) -> bool:
        return self._pending is not None and self._pending.pending

    def current_operation(self) -> Optional[Operation]:
        if self.trace is not None and 0 <= self.step_index < self.total:
            return self.trace[self.step_index]
        return None

    def state_snapshot(self) -> PlaybackSnapshot:
        return PlaybackSnapshot(
            step_index=self.step_index,
            total=self.total,
            running=self.running,
            phase=self.phase,
            speed_ms=self.speed_ms,
        )

    def displayed_array(self) -> List[float]:
        """The trace snapshot with every swap up to the current step applied."""
        if self.trace is None:
            return []
        return self.trace.array_at(self.step_index)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load_trace(self, trace: Trace, autoplay: bool = True) -> None:
        """Replace the trace.  Resets first; by default starts playing at step 0."""
        self.reset()
        self.trace = trace
        logger.info("loaded %s trace with %d operations", trace.algo_key or "ad-hoc", len(trace))
        if autoplay:
            self.running = True
            self._goto(0)
            self._settle()

    def reset(self) -> None:
        """Back to IDLE.  Keeps the trace; clears step, running flag and message."""
        self._cancel_pending()
        changed = self.step_index != -1
        self.running = False
        self.step_index = -1
        self.message = ""
        if changed:
            self._notify()

    def invalidate(self) -> None:
        """The array behind the trace changed: stop auto-advance, keep the step."""
        if self.running:
            self._cancel_pending()
            self.running = False
            logger.debug("playback paused at step %d: source array changed", self.step_index)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> bool:
        if self.trace is None:
            logger.warning("play() ignored: no trace loaded")
            return False
        if self.phase not in (PlaybackPhase.IDLE, PlaybackPhase.PAUSED):
            logger.debug("play() ignored in phase %s", self.phase.value)
            return False
        self.running = True
        self._schedule()
        return True

    def pause(self) -> bool:
        if self.phase != PlaybackPhase.PLAYING:
            logger.debug("pause() ignored in phase %s", self.phase.value)
            return False
        self._cancel_pending()
        self.running = False
        return True

    def toggle_play(self) -> bool:
        if self.is_playing:
            return self.pause()
        return self.play()

    # ------------------------------------------------------------------
    # Manual stepping (only while stopped)
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        """Show the next operation.  Returns False if playing or already at the end."""
        if self.trace is None or self.running or self.step_index >= self.total - 1:
            return False
        self._goto(self.step_index + 1)
        return True

    def step_back(self) -> bool:
        """Show the previous operation.  Returns False if playing or at the start."""
        if self.trace is None or self.running or self.step_index <= 0:
            return False
        self._goto(self.step_index - 1)
        return True

    # ------------------------------------------------------------------
    # Speed & annotations
    # ------------------------------------------------------------------
    def set_speed(self, ms: int) -> None:
        """New delay between steps.  The pending tick is re-armed with it."""
        self._cancel_pending()
        self.speed_ms = max(MIN_SPEED_MS, int(ms))
        if self.running:
            self._schedule()

    def set_speed_preset(self, preset: str) -> None:
        self.set_speed(SPEED_PRESETS.get(preset, DEFAULT_SPEED_MS))

    def annotate(self, text: str) -> None:
        self.message = text

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _advance(self) -> None:
        self._pending = None
        if not self.running or self.step_index >= self.total - 1:
            return
        self._goto(self.step_index + 1)
        self._settle()

    def _settle(self) -> None:
        """After landing on a step: finish, or arm the next tick."""
        if self.step_index >= self.total - 1:
            self.running = False
            logger.debug("playback finished after %d steps", self.total)
        elif self.running:
            self._schedule()

    def _schedule(self) -> None:
        self._cancel_pending()
        self._pending = self.scheduler.call_later(self.speed_ms, self._advance)

    def _cancel_pending(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def _goto(self, idx: int) -> None:
        self.step_index = idx
        self._notify()

    def _notify(self) -> None:
        if self.on_step:
            self.on_step(self.current_operation())

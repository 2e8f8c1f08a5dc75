"""
Breathing animation clock.

Elapsed time is always derived from wall-clock timestamps handed in by the
scheduler, never counted up per frame, so the pace is correct at whatever
refresh rate the host manages.
"""
from __future__ import annotations

import time
from typing import Any, Callable, Optional, Protocol

from box_breathing import phases

IDLE = "idle"
PLAYING = "playing"
PAUSED = "paused"

FRAME_INTERVAL_MS = 16  # ~60fps


class Scheduler(Protocol):
    """Host primitive: call back once on the next frame with a millisecond timestamp."""

    def schedule(self, callback: Callable[[float], None]) -> Any: ...

    def cancel(self, handle: Any) -> None: ...


class TkScheduler:
    """Scheduler backed by a tkinter widget's ``after`` queue."""

    def __init__(self, widget, interval_ms: int = FRAME_INTERVAL_MS,
                 now: Callable[[], float] = time.perf_counter):
        self.widget = widget
        self.interval_ms = interval_ms
        self.now = now

    def schedule(self, callback: Callable[[float], None]) -> str:
        return self.widget.after(self.interval_ms,
                                 lambda: callback(self.now() * 1000.0))

    def cancel(self, handle: str) -> None:
        self.widget.after_cancel(handle)


class BreathClock:
    """Play/pause/reset clock for the box breathing cycle."""

    def __init__(self, scheduler: Scheduler):
        self.scheduler = scheduler
        self.state = IDLE
        self._elapsed = 0.0
        self._anchor: Optional[float] = None
        self._handle = None
        self._generation = 0  # bumped on every cancel; stale frames compare against it
        self._listeners: list[Callable[["BreathClock"], None]] = []

    # ── Read accessors ───────────────────────────────────
    @property
    def elapsed(self) -> float:
        return self._elapsed

    @property
    def playing(self) -> bool:
        return self.state == PLAYING

    @property
    def idle(self) -> bool:
        return self.state == IDLE

    def cycle_offset(self) -> float:
        return phases.cycle_offset(self._elapsed)

    def completed_cycles(self) -> int:
        return phases.completed_cycles(self._elapsed)

    def current_level(self) -> float:
        return phases.level(self.cycle_offset())

    def current_instruction(self) -> str:
        return phases.instruction(self.cycle_offset())

    def phase_remaining(self) -> float:
        return phases.phase_remaining(self.cycle_offset())

    # ── Listeners ────────────────────────────────────────
    def add_listener(self, fn: Callable[["BreathClock"], None]) -> None:
        self._listeners.append(fn)

    def remove_listener(self, fn: Callable[["BreathClock"], None]) -> None:
        if fn in self._listeners:
            self._listeners.remove(fn)

    def _notify(self) -> None:
        for fn in list(self._listeners):
            fn(self)

    # ── Controls ─────────────────────────────────────────
    def play(self) -> None:
        if self.playing:
            return
        self.state = PLAYING
        self._anchor = None  # re-anchored on the first frame from the stored elapsed
        self._schedule_frame()
        self._notify()

    def pause(self) -> None:
        if not self.playing:
            return
        self._cancel_frame()
        self.state = PAUSED if self._elapsed > 0 else IDLE
        self._notify()

    def reset(self) -> None:
        self._cancel_frame()
        self.state = IDLE
        self._elapsed = 0.0
        self._anchor = None
        self._notify()

    def toggle(self) -> None:
        if self.playing:
            self.pause()
        else:
            self.play()

    # ── Frame loop ───────────────────────────────────────
    def _schedule_frame(self) -> None:
        generation = self._generation
        self._handle = self.scheduler.schedule(
            lambda timestamp: self._on_frame(timestamp, generation))

    def _cancel_frame(self) -> None:
        self._generation += 1
        if self._handle is not None:
            self.scheduler.cancel(self._handle)
            self._handle = None

    def _on_frame(self, timestamp: float, generation: int) -> None:
        if generation != self._generation or not self.playing:
            return
        if self._anchor is None:
            self._anchor = timestamp - self._elapsed * 1000.0
        # Timestamps are monotonic, but never let elapsed run backwards
        self._elapsed = max(self._elapsed, (timestamp - self._anchor) / 1000.0)
        self._schedule_frame()
        self._notify()

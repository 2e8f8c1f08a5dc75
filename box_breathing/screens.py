"""Screen flow and the text/visibility rules of the breathing screen."""
from __future__ import annotations

import math

from box_breathing.clock import BreathClock

HOME = "home"
SETUP = "setup"
PROGRAM = "program"
SCREENS = (HOME, SETUP, PROGRAM)


class ScreenFlow:
    """Which screen is showing; leaving the breathing screen always resets the clock."""

    def __init__(self, clock: BreathClock, screen: str = HOME):
        self.clock = clock
        self.screen = screen

    def go(self, screen: str) -> None:
        if screen not in SCREENS:
            raise ValueError(f"unknown screen {screen!r}")
        if self.screen == PROGRAM and screen != PROGRAM:
            self.clock.reset()
        self.screen = screen


def overlay_visible(clock: BreathClock) -> bool:
    """The big Play button sits over the graph only while the clock is idle."""
    return clock.idle


def play_label(clock: BreathClock) -> str:
    return "Pause" if clock.playing else "Play"


def phase_hint(clock: BreathClock) -> str:
    """Whole seconds left in the phase, or a prompt before the first play."""
    if clock.idle:
        return "Press play and follow the dot"
    return f"{math.ceil(clock.phase_remaining())}"


def cycles_text(done: int, recommended: int, maximum: int) -> str:
    if done >= maximum:
        return f"Cycles: {done}  (limit of {maximum} reached)"
    if done >= recommended:
        return f"Cycles: {done}  (up to {maximum} if tolerating)"
    return f"Cycles: {done}  (start with {recommended})"

"""
Box breathing phase model
━━━━━━━━━━━━━━━━━━━━━━━━━

Maps an offset within one breathing cycle to a breath level (0 = empty,
1 = full) and the instruction shown to the user. Both views derive from
the same offset so the text and the graph marker never drift apart.
"""
from __future__ import annotations

import math

# ─── Cycle Constants ─────────────────────────────────────────
PHASE_SECONDS = 4
CYCLE_SECONDS = PHASE_SECONDS * 4

INHALE = "Inhale"
HOLD = "Hold"
EXHALE = "Exhale"

# (label, level at phase start, level at phase end)
PHASES = [
    (INHALE, 0.0, 1.0),
    (HOLD,   1.0, 1.0),
    (EXHALE, 1.0, 0.0),
    (HOLD,   0.0, 0.0),
]

# The graph closes on the cycle end, sampled just before it wraps to zero
CYCLE_END_EPSILON = 0.0001


def phase_index(offset: float) -> int:
    """Index 0-3 of the phase containing ``offset`` (boundaries go to the later phase)."""
    if offset < PHASE_SECONDS:
        return 0
    if offset < PHASE_SECONDS * 2:
        return 1
    if offset < PHASE_SECONDS * 3:
        return 2
    return 3


def level(offset: float) -> float:
    """Breath level for an offset in [0, CYCLE_SECONDS)."""
    if offset < PHASE_SECONDS:
        return offset / PHASE_SECONDS
    if offset < PHASE_SECONDS * 2:
        return 1.0
    if offset < PHASE_SECONDS * 3:
        return 1.0 - (offset - PHASE_SECONDS * 2) / PHASE_SECONDS
    return 0.0


def instruction(offset: float) -> str:
    """Instruction label for an offset in [0, CYCLE_SECONDS)."""
    return PHASES[phase_index(offset)][0]


def phase_remaining(offset: float) -> float:
    """Seconds left before the next phase starts."""
    return PHASE_SECONDS * (phase_index(offset) + 1) - offset


def cycle_offset(elapsed: float) -> float:
    return elapsed % CYCLE_SECONDS


def completed_cycles(elapsed: float) -> int:
    return int(math.floor(elapsed / CYCLE_SECONDS))


def waveform_samples(step_seconds: float = 0.2) -> list[tuple[float, float]]:
    """
    Sample one full cycle of the breath curve as (offset, level) pairs.

    Offsets run from 0 in ``step_seconds`` increments. The last point sits
    on the cycle end so a drawn polyline closes; its level is read just
    inside the cycle.
    """
    if step_seconds <= 0:
        raise ValueError(f"step_seconds must be positive, got {step_seconds!r}")

    samples = []
    count = int(math.floor(CYCLE_SECONDS / step_seconds + 1e-9))
    for i in range(count + 1):
        offset = min(float(i * step_seconds), float(CYCLE_SECONDS))
        samples.append((offset, level(min(offset, CYCLE_SECONDS - CYCLE_END_EPSILON))))
    if samples[-1][0] < CYCLE_SECONDS:
        samples.append((float(CYCLE_SECONDS), level(CYCLE_SECONDS - CYCLE_END_EPSILON)))
    return samples

"""Time-source adapters: map elapsed time onto the Idle/Glitching cycle.

Both backends answer the same question, `locate(elapsed)`, with elapsed
measured in ms from the moment the cycle gate opened:

    TimerClock  -- free-running: chains one-shot deadlines like
                   `delay(duration); delay(interval)` in a loop.
    PhaseClock  -- phase-driven: a repeating 0..1 progress ramp with period
                   `duration + interval`.

Both place the boundaries with `_position`, so they agree on every
timestamp, including fractional durations.
"""

from __future__ import annotations

from dataclasses import dataclass

from glitchfx.core import EffectConfig


@dataclass(frozen=True)
class PhasePosition:
    """Where `elapsed` falls: which cycle, which phase, and that phase's bounds."""
    cycle: int
    glitching: bool
    phase_start: float
    phase_end: float


NEVER = PhasePosition(0, False, 0.0, float("inf"))


def _position(elapsed: float, duration: float, period: float) -> PhasePosition:
    """Cycle index by division; glitching while `elapsed - cycle_start < duration`."""
    if duration <= 0:
        return NEVER
    elapsed = max(0.0, elapsed)
    cycle = int(elapsed // period)
    # Rounding in `cycle * period` may land one cycle off.
    if cycle > 0 and cycle * period > elapsed:
        cycle -= 1
    elif (cycle + 1) * period <= elapsed:
        cycle += 1
    cycle_start = cycle * period
    if elapsed - cycle_start < duration:
        return PhasePosition(cycle, True, cycle_start, cycle_start + duration)
    return PhasePosition(cycle, False, cycle_start + duration, cycle_start + period)


class TimerClock:
    """Free-running backend driven by successive one-shot deadlines.

    The furthest time seen is kept, so a deadline that has fired stays
    fired until `reset()`.
    """

    name = "timer"

    def __init__(self, duration: float, interval: float):
        self.duration = max(0.0, float(duration))
        self.interval = max(0.0, float(interval))
        self.reset()

    def reset(self) -> None:
        self._reached = 0.0

    def locate(self, elapsed: float) -> PhasePosition:
        self._reached = max(self._reached, float(elapsed))
        return _position(self._reached, self.duration, self.duration + self.interval)


class PhaseClock:
    """Phase-driven backend: derives the phase from a repeating progress value."""

    name = "phase"

    def __init__(self, duration: float, interval: float):
        self.duration = max(0.0, float(duration))
        self.interval = max(0.0, float(interval))
        self.period = self.duration + self.interval

    def progress(self, elapsed: float) -> float:
        """Normalized position within the current cycle, in [0, 1)."""
        if self.period <= 0:
            return 0.0
        return (max(0.0, elapsed) % self.period) / self.period

    def locate(self, elapsed: float) -> PhasePosition:
        return _position(elapsed, self.duration, self.period)


CLOCKS = {
    TimerClock.name: TimerClock,
    PhaseClock.name: PhaseClock,
}


def make_clock(name: str, config: EffectConfig) -> TimerClock | PhaseClock:
    """Build the named time-source backend for a config."""
    try:
        cls = CLOCKS[name]
    except KeyError:
        raise ValueError(f"Unknown clock: {name}") from None
    return cls(config.glitch_duration, config.idle_interval)

"""Cycle scheduler: the Idle -> Glitching -> Idle state machine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from glitchfx.clock import PhasePosition, make_clock
from glitchfx.core import EffectConfig
from glitchfx.rng import RandomStream

logger = logging.getLogger(__name__)

IDLE = "idle"
GLITCHING = "glitching"

START = "start"
RESAMPLE = "resample"
END = "end"


@dataclass(frozen=True)
class PhaseEvent:
    """Something that happened on the timeline: a glitch start, a resample, or an end."""
    kind: str
    at: float
    cycle: int


class CycleScheduler:
    """Advances the glitch cycle for one controller.

    The scheduler is passive: the host calls `advance(now)` once per tick with
    a non-decreasing timestamp. Event times are computed on the virtual
    timeline, not snapped to ticks, so a coarse tick reports the same events
    a fine one would.

    Args:
        config: Timing configuration.
        rng: Stream used to draw resample gaps.
        clock: Time-source backend name, 'timer' or 'phase'.
        created_at: Host timestamp (ms) the scheduler was created at.
    """

    def __init__(
        self,
        config: EffectConfig,
        rng: RandomStream,
        clock: str = "timer",
        created_at: float = 0.0,
    ):
        self.config = config
        self.rng = rng
        self.clock = make_clock(clock, config)
        self.start_time = float(created_at) + config.initial_delay

        self.phase = IDLE
        self.started = False
        self.cycle = -1
        self._phase_end = 0.0
        self._next_resample = 0.0
        self._last_now = float("-inf")

    @property
    def is_glitching(self) -> bool:
        return self.phase == GLITCHING

    def _draw_gap(self) -> int:
        return self.rng.next_int_range(*self.config.resample_interval)

    def _emit(self, events, on_event, kind: str, at: float) -> None:
        event = PhaseEvent(kind, self.start_time + at, self.cycle)
        events.append(event)
        if on_event is not None:
            on_event(event)

    def _resample_until(self, until: float, events, on_event) -> None:
        # Resamples landing on or after the phase end belong to no phase.
        while self._next_resample <= until and self._next_resample < self._phase_end:
            at = self._next_resample
            self._emit(events, on_event, RESAMPLE, at)
            self._next_resample = at + self._draw_gap()

    def _enter(self, pos: PhasePosition, events, on_event) -> None:
        if self.cycle >= 0 and pos.cycle > self.cycle + 1:
            logger.debug("Skipped %d glitch cycle(s)", pos.cycle - self.cycle - 1)
        self.cycle = pos.cycle
        self.phase = GLITCHING
        self._phase_end = pos.phase_end
        logger.debug("Cycle %d: glitching at %.1f ms", self.cycle, self.start_time + pos.phase_start)
        self._emit(events, on_event, START, pos.phase_start)
        self._next_resample = pos.phase_start + self._draw_gap()

    def _leave(self, events, on_event) -> None:
        self.phase = IDLE
        logger.debug("Cycle %d: idle at %.1f ms", self.cycle, self.start_time + self._phase_end)
        self._emit(events, on_event, END, self._phase_end)

    def advance(
        self,
        now: float,
        on_event: Callable[[PhaseEvent], None] | None = None,
    ) -> list[PhaseEvent]:
        """Move the state machine to `now`.

        Args:
            now: Host timestamp in ms. Earlier timestamps than the last call
                are ignored.
            on_event: Called for each event, in order, as it happens. A
                sample requested from inside this callback is drawn before
                the next resample gap.

        Returns:
            The events that occurred since the previous call.
        """
        events: list[PhaseEvent] = []
        now = float(now)
        if not self.config.enabled or now < self.start_time or now < self._last_now:
            return events
        self._last_now = now
        self.started = True

        elapsed = now - self.start_time
        pos = self.clock.locate(elapsed)

        if self.phase == GLITCHING:
            if pos.glitching and pos.cycle == self.cycle:
                self._resample_until(elapsed, events, on_event)
                return events
            self._resample_until(self._phase_end, events, on_event)
            self._leave(events, on_event)

        if pos.glitching and pos.cycle > self.cycle:
            self._enter(pos, events, on_event)
            self._resample_until(elapsed, events, on_event)

        return events

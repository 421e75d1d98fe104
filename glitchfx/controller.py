"""EffectController: scheduler + sampler + compositor as one per-surface unit."""

from __future__ import annotations

import logging
from typing import Callable

from glitchfx.canvas import Canvas
from glitchfx.compositor import composite
from glitchfx.core import IDLE_PARAMETERS, EffectConfig, GlitchParameters
from glitchfx.rng import RandomStream
from glitchfx.sampler import sample
from glitchfx.scheduler import END, CycleScheduler, PhaseEvent

logger = logging.getLogger(__name__)


class EffectController:
    """Drives the glitch effect for one drawing surface.

    The host owns the timeline: call `advance(now)` whenever time moves
    (every frame, or on a timer) and `render(...)` whenever it paints. The
    controller spawns nothing and needs no teardown.

    Args:
        config: Timing configuration (defaults if omitted).
        seed: Seed for the random stream; drawn from OS entropy if None.
        clock: Time-source backend, 'timer' or 'phase'.
        created_at: Host timestamp (ms) of construction; the initial delay
            counts from here.
    """

    def __init__(
        self,
        config: EffectConfig | None = None,
        seed: int | None = None,
        clock: str = "timer",
        created_at: float = 0.0,
    ):
        self.config = config if config is not None else EffectConfig()
        self.rng = RandomStream(seed)
        self.scheduler = CycleScheduler(self.config, self.rng, clock=clock, created_at=created_at)
        self.params: GlitchParameters = IDLE_PARAMETERS
        logger.debug("EffectController seed=%d clock=%s", self.rng.seed, clock)

    @property
    def seed(self) -> int:
        return self.rng.seed

    def _on_event(self, event: PhaseEvent) -> None:
        if event.kind == END:
            self.params = IDLE_PARAMETERS
        else:
            self.params = sample(self.rng)

    def tick(self, now: float) -> list[PhaseEvent]:
        """Move to `now` and return the scheduler events that fired."""
        return self.scheduler.advance(now, on_event=self._on_event)

    def advance(self, now: float) -> GlitchParameters:
        """Move to `now` and return the parameters to paint with."""
        self.tick(now)
        return self.params

    def render(self, canvas: Canvas, paint_content: Callable[[], None]) -> None:
        """Composite the most recent parameters; does not advance time."""
        composite(self.params, paint_content, canvas)

    def frame(
        self,
        now: float,
        canvas: Canvas,
        paint_content: Callable[[], None],
    ) -> GlitchParameters:
        """Advance to `now` and render in one call."""
        params = self.advance(now)
        self.render(canvas, paint_content)
        return params

"""glitch-fx: periodic band-displacement + chromatic-ghosting glitch effect."""

from glitchfx.core import Slice, GlitchParameters, IDLE_PARAMETERS, EffectConfig
from glitchfx.rng import RandomStream
from glitchfx.sampler import sample
from glitchfx.clock import TimerClock, PhaseClock, make_clock
from glitchfx.scheduler import CycleScheduler, PhaseEvent
from glitchfx.canvas import Canvas, RecordingCanvas, ArrayCanvas, DrawOp
from glitchfx.compositor import composite
from glitchfx.controller import EffectController

__version__ = "0.1.0"

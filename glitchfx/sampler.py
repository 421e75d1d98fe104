"""Distortion sampler: one random draw sequence -> one GlitchParameters value."""

from __future__ import annotations

from glitchfx.core import GlitchParameters, Slice
from glitchfx.rng import RandomStream

OFFSET_X_RANGE = (-10.0, 10.0)
OFFSET_Y_RANGE = (-2.0, 2.0)
SLICE_COUNT_RANGE = (3, 8)  # upper bound exclusive
SLICE_HEIGHT_RANGE = (0.0, 0.2)
SLICE_OFFSET_RANGE = (-20.0, 20.0)
CHROMATIC_RANGE = (0.0, 10.0)


def sample(rng: RandomStream) -> GlitchParameters:
    """Draw a fresh set of glitch parameters.

    The draw order is fixed (offsets, slice count, per-slice start/height/offset,
    chromatic shift); changing it changes every seeded sequence.
    """
    offset_x = rng.next_float_range(*OFFSET_X_RANGE)
    offset_y = rng.next_float_range(*OFFSET_Y_RANGE)

    n_slices = rng.next_int_range(*SLICE_COUNT_RANGE)
    slices = []
    for _ in range(n_slices):
        start = rng.next_float()
        height = rng.next_float_range(*SLICE_HEIGHT_RANGE)
        offset = rng.next_float_range(*SLICE_OFFSET_RANGE)
        slices.append(Slice(start, min(start + height, 1.0), offset))

    chromatic = rng.next_float_range(*CHROMATIC_RANGE)

    return GlitchParameters(
        offset_x=offset_x,
        offset_y=offset_y,
        chromatic_offset=chromatic,
        slices=tuple(slices),
    )

"""Layered compositing of one GlitchParameters sample onto a canvas."""

from __future__ import annotations

from typing import Callable

from glitchfx.canvas import Canvas
from glitchfx.core import GlitchParameters

GHOST_ALPHA = 0.5


def composite(
    params: GlitchParameters,
    paint_content: Callable[[], None],
    canvas: Canvas,
) -> None:
    """Paint content through the glitch described by `params`.

    Layer order, all under a global (offset_x, offset_y) translation:
    two half-opacity ghosts at +/- chromatic_offset, the full-opacity content,
    then one clipped and horizontally displaced repaint per slice.

    Idle parameters paint the content exactly once, untransformed.
    `paint_content` must draw the same thing every call; it is invoked up to
    3 + len(params.slices) times. Its exceptions propagate.
    """
    if params.is_idle:
        paint_content()
        return

    width, height = canvas.size

    with canvas.translated(params.offset_x, params.offset_y):
        if params.chromatic_offset != 0:
            for shift in (params.chromatic_offset, -params.chromatic_offset):
                with canvas.translated(shift, 0.0), canvas.layer(GHOST_ALPHA):
                    paint_content()

        paint_content()

        for band in params.slices:
            with canvas.clipped(0.0, band.top * height, width, band.bottom * height):
                with canvas.translated(band.offset, 0.0):
                    paint_content()

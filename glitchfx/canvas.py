"""Drawing surfaces: a transform/clip/layer stack plus two concrete canvases."""

from __future__ import annotations

import math
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Any

import numpy as np
from scipy import ndimage

Rect = tuple[float, float, float, float]  # left, top, right, bottom


@dataclass(frozen=True)
class DrawState:
    """Accumulated drawing state: translation, opacity, and clip in surface pixels."""
    dx: float = 0.0
    dy: float = 0.0
    alpha: float = 1.0
    clip: Rect | None = None


def _intersect(a: Rect | None, b: Rect) -> Rect:
    if a is None:
        return b
    left, top = max(a[0], b[0]), max(a[1], b[1])
    right, bottom = min(a[2], b[2]), min(a[3], b[3])
    return (left, top, max(left, right), max(top, bottom))


class Canvas:
    """Base surface. Subclasses implement `draw`.

    Transforms nest like a save/restore stack:

        with canvas.translated(5, 0):
            with canvas.layer(0.5):
                canvas.draw(frame)
    """

    def __init__(self, width: int, height: int):
        self.width = int(width)
        self.height = int(height)
        self._stack = [DrawState()]

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def state(self) -> DrawState:
        return self._stack[-1]

    @contextmanager
    def _push(self, state: DrawState):
        self._stack.append(state)
        try:
            yield self
        finally:
            self._stack.pop()

    def translated(self, dx: float, dy: float):
        s = self.state
        return self._push(replace(s, dx=s.dx + dx, dy=s.dy + dy))

    def clipped(self, left: float, top: float, right: float, bottom: float):
        """Restrict drawing to a rectangle given in the current (translated) coordinates."""
        s = self.state
        rect = (left + s.dx, top + s.dy, right + s.dx, bottom + s.dy)
        return self._push(replace(s, clip=_intersect(s.clip, rect)))

    def layer(self, alpha: float):
        s = self.state
        return self._push(replace(s, alpha=s.alpha * max(0.0, min(float(alpha), 1.0))))

    def draw(self, source: Any = None) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class DrawOp:
    """One recorded paint call with the state it was issued under."""
    dx: float
    dy: float
    alpha: float
    clip: Rect | None
    source: Any = None


class RecordingCanvas(Canvas):
    """Records every draw call instead of rasterizing."""

    def __init__(self, width: int = 200, height: int = 400):
        super().__init__(width, height)
        self.ops: list[DrawOp] = []

    def draw(self, source: Any = None) -> None:
        s = self.state
        self.ops.append(DrawOp(s.dx, s.dy, s.alpha, s.clip, source))

    def clear(self) -> None:
        self.ops.clear()


class ArrayCanvas(Canvas):
    """Raster surface backed by a float32 (H, W, C) buffer.

    Translations may be fractional; images are resampled bilinearly and
    blended with coverage so edges fade instead of snapping.
    """

    def __init__(self, width: int, height: int, channels: int = 3, background=0):
        super().__init__(width, height)
        self.channels = channels
        self.buffer = np.zeros((self.height, self.width, channels), dtype=np.float32)
        self.clear(background)

    @classmethod
    def like(cls, image: np.ndarray, background=0) -> ArrayCanvas:
        h, w = image.shape[:2]
        channels = image.shape[2] if image.ndim == 3 else 1
        return cls(w, h, channels=channels, background=background)

    def clear(self, color=0) -> None:
        self.buffer[...] = np.asarray(color, dtype=np.float32)

    def _clip_window(self) -> tuple[int, int, int, int]:
        clip = self.state.clip
        if clip is None:
            return 0, 0, self.width, self.height
        left, top, right, bottom = (int(math.floor(v + 0.5)) for v in clip)
        left = max(0, min(left, self.width))
        right = max(left, min(right, self.width))
        top = max(0, min(top, self.height))
        bottom = max(top, min(bottom, self.height))
        return left, top, right, bottom

    def draw(self, source: Any = None) -> None:
        """Composite `source` (an image of the canvas size) under the current state."""
        src = np.asarray(source, dtype=np.float32)
        if src.ndim == 2:
            src = src[:, :, np.newaxis]
        if src.shape != self.buffer.shape:
            raise ValueError(
                f"Image shape {src.shape} does not match canvas {self.buffer.shape}"
            )

        s = self.state
        left, top, right, bottom = self._clip_window()
        if s.alpha <= 0 or right <= left or bottom <= top:
            return

        coverage = np.ones(src.shape[:2], dtype=np.float32)
        if s.dx or s.dy:
            # Zero fill leaves `src` premultiplied by `coverage`.
            src = ndimage.shift(src, (s.dy, s.dx, 0), order=1, mode="grid-constant", cval=0.0)
            coverage = ndimage.shift(coverage, (s.dy, s.dx), order=1, mode="grid-constant", cval=0.0)

        window = (slice(top, bottom), slice(left, right))
        weight = s.alpha * coverage[window][:, :, np.newaxis]
        region = self.buffer[window]
        self.buffer[window] = region * (1.0 - weight) + s.alpha * src[window]

    def to_image(self) -> np.ndarray:
        """Current buffer as uint8, squeezed back to 2D for single-channel canvases."""
        out = np.clip(np.rint(self.buffer), 0, 255).astype(np.uint8)
        if self.channels == 1:
            return out[:, :, 0]
        return out

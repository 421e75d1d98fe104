"""Shared test fixtures — seeded streams, test frames, recording canvases."""

import numpy as np
import pytest

from glitchfx.canvas import RecordingCanvas
from glitchfx.core import EffectConfig
from glitchfx.rng import RandomStream


@pytest.fixture
def rng():
    return RandomStream(1234)


@pytest.fixture
def frame():
    """A 200x400 (W x H) frame where every pixel encodes its own column and row."""
    h, w = 400, 200
    f = np.zeros((h, w, 3), dtype=np.uint8)
    f[:, :, 0] = (np.arange(w) % 256).reshape(1, w)
    f[:, :, 1] = (np.arange(h) % 256).reshape(h, 1)
    f[:, :, 2] = 77
    return f


@pytest.fixture
def small_frame():
    """A 40x30 gradient frame for fast rendering tests."""
    h, w = 30, 40
    f = np.zeros((h, w, 3), dtype=np.uint8)
    f[:, :, 0] = (np.arange(w) * 6).reshape(1, w)
    f[:, :, 1] = (np.arange(h) * 8).reshape(h, 1)
    f[:, :, 2] = 128
    return f


@pytest.fixture
def canvas():
    return RecordingCanvas(200, 400)


@pytest.fixture
def short_config():
    """200 ms glitch, 300 ms idle: one cycle every 500 ms."""
    return EffectConfig(glitch_duration=200, idle_interval=300)

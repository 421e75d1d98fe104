"""Tests for media module (no actual ffmpeg encoding)."""

import numpy as np
import pytest
from PIL import Image

from glitchfx.controller import EffectController
from glitchfx.core import EffectConfig
from glitchfx.media import (
    load_image, render_frames, save_frames, write_video,
)


@pytest.fixture
def small_png(small_frame, tmp_path):
    path = str(tmp_path / "in.png")
    Image.fromarray(small_frame).save(path)
    return path


class TestLoad:
    def test_load_image(self, small_frame, small_png):
        np.testing.assert_array_equal(load_image(small_png), small_frame)

    def test_load_grayscale_with_resolution(self, small_frame, tmp_path):
        path = str(tmp_path / "gray.png")
        Image.fromarray(small_frame).convert("L").save(path)
        img = load_image(path, resolution=(20, 20))
        assert img.shape == (20, 20, 3)

    @pytest.mark.parametrize("fit", ["cover", "contain", "stretch"])
    def test_fit_modes(self, small_png, fit):
        result = load_image(small_png, (64, 24), fit=fit)
        assert result.shape == (24, 64, 3)
        assert result.dtype == np.uint8

    def test_contain_letterboxes(self, small_png):
        # 40x30 scaled into 64x24 is 32x24, centered with 16 px bars.
        result = load_image(small_png, (64, 24), fit="contain")
        assert np.all(result[:, :12] == 0)
        assert np.all(result[:, -12:] == 0)
        assert np.all(result[:, 28:36, 2] > 100)

    def test_cover_fills(self, small_png):
        result = load_image(small_png, (64, 24), fit="cover")
        assert np.all(result[:, :, 2] > 100)

    def test_own_size_unchanged(self, small_frame, small_png):
        np.testing.assert_array_equal(load_image(small_png, (40, 30), fit="stretch"), small_frame)

    def test_invalid_fit(self, small_png):
        with pytest.raises(ValueError):
            load_image(small_png, (10, 10), fit="zoom")


class TestRenderFrames:
    def test_disabled_is_passthrough(self, small_frame):
        controller = EffectController(EffectConfig(enabled=False), seed=1)
        frames = render_frames(controller, small_frame, 1000, fps=10)
        assert len(frames) == 10
        for f in frames:
            np.testing.assert_array_equal(f, small_frame)

    def test_glitch_changes_frames(self, small_frame):
        config = EffectConfig(glitch_duration=200, idle_interval=300)
        controller = EffectController(config, seed=4)
        frames = render_frames(controller, small_frame, 500, fps=10)
        assert len(frames) == 5
        assert not np.array_equal(frames[0], small_frame)
        # t = 300 ms and 400 ms fall in the idle phase.
        np.testing.assert_array_equal(frames[3], small_frame)
        np.testing.assert_array_equal(frames[4], small_frame)

    def test_reproducible(self, small_frame):
        config = EffectConfig(glitch_duration=200, idle_interval=300)
        a = render_frames(EffectController(config, seed=9), small_frame, 400, fps=20)
        b = render_frames(EffectController(config, seed=9), small_frame, 400, fps=20)
        for x, y in zip(a, b):
            np.testing.assert_array_equal(x, y)


class TestOutput:
    def test_save_frames(self, small_frame, tmp_path):
        paths = save_frames([small_frame] * 3, str(tmp_path / "seq"))
        assert len(paths) == 3
        assert paths == sorted(paths)
        loaded = np.array(Image.open(paths[0]))
        np.testing.assert_array_equal(loaded, small_frame)

    def test_write_video_needs_frames(self, tmp_path):
        with pytest.raises(ValueError):
            write_video([], str(tmp_path / "out.mp4"))

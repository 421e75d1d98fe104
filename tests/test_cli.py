"""Tests for CLI module."""

import json

import numpy as np
import pytest
from PIL import Image

from glitchfx.cli import build_parser, main, _get_effect_config
from glitchfx.core import EffectConfig


class TestParser:
    def test_parser_builds(self):
        assert build_parser() is not None

    def test_render_args(self):
        parser = build_parser()
        args = parser.parse_args(["render", "in.png", "-o", "out.mp4",
                                  "--length", "3000", "--fps", "24",
                                  "--resolution", "320x240", "--clock", "phase"])
        assert args.command == "render"
        assert args.input == "in.png"
        assert args.output == "out.mp4"
        assert args.length == 3000.0
        assert args.fps == 24
        assert args.resolution == (320, 240)
        assert args.clock == "phase"

    def test_bad_resolution(self):
        parser = build_parser()
        with pytest.raises(SystemExit):
            parser.parse_args(["render", "in.png", "-o", "out.mp4", "--resolution", "big"])

    def test_no_command(self):
        args = build_parser().parse_args([])
        assert args.command is None
        with pytest.raises(SystemExit):
            main([])


class TestEffectConfig:
    def test_flags(self):
        args = build_parser().parse_args([
            "timeline", "--delay", "100", "--duration", "250", "--interval", "750",
            "--resample-min", "20", "--resample-max", "40", "--disabled",
        ])
        config = _get_effect_config(args)
        assert config == EffectConfig(
            enabled=False, initial_delay=100, glitch_duration=250,
            idle_interval=750, resample_interval=(20, 40),
        )

    def test_flags_override_config_file(self, tmp_path):
        path = str(tmp_path / "effect.json")
        EffectConfig(glitch_duration=300, idle_interval=900).save(path)
        args = build_parser().parse_args(["timeline", "--config", path, "--interval", "100"])
        config = _get_effect_config(args)
        assert config.glitch_duration == 300
        assert config.idle_interval == 100


class TestCommands:
    def test_params(self, tmp_path, capsys):
        out = str(tmp_path / "params.json")
        main(["params", "-o", out, "--count", "4", "--seed", "12"])
        with open(out) as f:
            data = json.load(f)
        assert data["seed"] == 12
        assert len(data["samples"]) == 4
        assert all(3 <= len(s["slices"]) <= 7 for s in data["samples"])
        assert "Params" in capsys.readouterr().out

    def test_timeline_json(self, tmp_path):
        out = str(tmp_path / "timeline.json")
        main(["timeline", "-o", out, "--length", "1000", "--tick", "10",
              "--duration", "200", "--interval", "300", "--seed", "1"])
        with open(out) as f:
            data = json.load(f)
        starts = [e["at"] for e in data["events"] if e["kind"] == "start"]
        ends = [e["at"] for e in data["events"] if e["kind"] == "end"]
        assert starts == [0.0, 500.0]
        assert ends == [200.0, 700.0]

    def test_timeline_fractional_tick(self, monkeypatch, capsys):
        from glitchfx.controller import EffectController
        seen = []
        original = EffectController.tick

        def recording_tick(self, now):
            seen.append(now)
            return original(self, now)

        monkeypatch.setattr(EffectController, "tick", recording_tick)
        main(["timeline", "--length", "100", "--tick", "0.1", "--seed", "1"])
        assert len(seen) == 1000
        assert seen == [k * 0.1 for k in range(1000)]

    def test_timeline_print(self, capsys):
        main(["timeline", "--length", "600", "--tick", "20",
              "--duration", "200", "--interval", "300", "--seed", "1"])
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines[0].endswith("start")
        assert any(line.endswith("end") for line in lines)

    def test_frames(self, tmp_path, small_frame):
        img_path = str(tmp_path / "in.png")
        Image.fromarray(small_frame).save(img_path)
        out_dir = tmp_path / "frames"
        main(["frames", img_path, "-o", str(out_dir), "--length", "300",
              "--fps", "10", "--seed", "3", "--duration", "200", "--interval", "300"])
        written = sorted(out_dir.glob("*.png"))
        assert len(written) == 3
        first = np.array(Image.open(written[0]))
        assert first.shape == small_frame.shape

"""Unified CLI entry point for glitch-fx."""

import argparse
import json
import logging
import sys

from glitchfx.core import EffectConfig


def _add_seed_arg(parser):
    parser.add_argument("-seed", "--seed", type=int, default=None,
                        help="Random seed for reproducibility")


def _add_output_arg(parser):
    parser.add_argument("-o", "--output", required=True,
                        help="Output path")


def _add_effect_args(p):
    """Add timing arguments shared by every effect command."""
    p.add_argument("--config", default=None, help="EffectConfig JSON file")
    p.add_argument("--delay", type=float, default=None, help="Initial delay ms")
    p.add_argument("--duration", type=float, default=None, help="Glitch phase length ms")
    p.add_argument("--interval", type=float, default=None, help="Idle phase length ms")
    p.add_argument("--resample-min", type=int, default=None)
    p.add_argument("--resample-max", type=int, default=None)
    p.add_argument("--disabled", action="store_true", help="Render without glitching")
    p.add_argument("--clock", choices=["timer", "phase"], default="timer",
                   help="Time-source backend")
    _add_seed_arg(p)


def _get_effect_config(args) -> EffectConfig:
    """Build an EffectConfig: config file first, then explicit flags on top."""
    base = EffectConfig.load(args.config) if args.config else EffectConfig()
    d = base.to_dict()
    if args.delay is not None:
        d["initial_delay"] = args.delay
    if args.duration is not None:
        d["glitch_duration"] = args.duration
    if args.interval is not None:
        d["idle_interval"] = args.interval
    lo, hi = d["resample_interval"]
    if args.resample_min is not None:
        lo = args.resample_min
    if args.resample_max is not None:
        hi = args.resample_max
    d["resample_interval"] = (lo, hi)
    if args.disabled:
        d["enabled"] = False
    return EffectConfig.from_dict(d)


def _make_controller(args):
    from glitchfx.controller import EffectController
    return EffectController(_get_effect_config(args), seed=args.seed, clock=args.clock)


def _parse_resolution(value: str) -> tuple[int, int]:
    """Parse 'WIDTHxHEIGHT'."""
    try:
        w, h = value.lower().split("x")
        return int(w), int(h)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got {value!r}") from None


def _render_image(args):
    from glitchfx.media import load_image, render_frames
    image = load_image(args.input, args.resolution, fit=args.fit)
    controller = _make_controller(args)
    frames = render_frames(controller, image, args.length, fps=args.fps)
    return frames, controller.seed


def cmd_render(args):
    """Render a glitched still image to a video or GIF."""
    from glitchfx.media import write_video
    frames, seed = _render_image(args)
    write_video(frames, args.output, fps=args.fps)
    print(f"Rendered ({len(frames)} frames, seed {seed}) -> {args.output}")


def cmd_frames(args):
    """Render a glitched still image to a PNG sequence."""
    from glitchfx.media import save_frames
    frames, seed = _render_image(args)
    paths = save_frames(frames, args.output)
    print(f"Frames ({len(paths)}, seed {seed}) -> {args.output}")


def cmd_params(args):
    """Export sampled glitch parameter sets as JSON."""
    from glitchfx.rng import RandomStream
    from glitchfx.sampler import sample
    rng = RandomStream(args.seed)
    samples = [sample(rng).to_dict() for _ in range(args.count)]
    with open(args.output, "w") as f:
        json.dump({"seed": rng.seed, "samples": samples}, f, indent=2)
    print(f"Params ({len(samples)} samples, seed {rng.seed}) -> {args.output}")


def cmd_timeline(args):
    """Run the scheduler with a fixed tick and list its events."""
    if args.tick <= 0:
        raise ValueError(f"Tick must be positive, got {args.tick}")
    controller = _make_controller(args)
    events = []
    # Tick k lands at k * tick; no running sum.
    k = 0
    while k * args.tick < args.length:
        events.extend(controller.tick(k * args.tick))
        k += 1

    rows = [{"kind": e.kind, "at": e.at, "cycle": e.cycle} for e in events]
    if args.output:
        with open(args.output, "w") as f:
            json.dump({"seed": controller.seed, "events": rows}, f, indent=2)
        print(f"Timeline ({len(rows)} events) -> {args.output}")
    else:
        for row in rows:
            print(f"{row['at']:10.1f} ms  cycle {row['cycle']:<3d} {row['kind']}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glitchfx",
        description="Periodic glitch distortion: band displacement + chromatic ghosting",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # --- render / frames ---
    for name, func, help_text in (
        ("render", cmd_render, "Render a glitched image to .mp4 or .gif"),
        ("frames", cmd_frames, "Render a glitched image to a PNG sequence"),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("input", help="Input image")
        _add_output_arg(p)
        p.add_argument("--length", type=float, default=5000.0, help="Output length ms")
        p.add_argument("--fps", type=int, default=30)
        p.add_argument("--resolution", type=_parse_resolution, default=None,
                       help="Output size WIDTHxHEIGHT (default: image size)")
        p.add_argument("--fit", choices=["cover", "contain", "stretch"], default="cover")
        _add_effect_args(p)
        p.set_defaults(func=func)

    # --- params ---
    p = subparsers.add_parser("params", help="Export sampled glitch parameters as JSON")
    _add_output_arg(p)
    p.add_argument("--count", type=int, default=16)
    _add_seed_arg(p)
    p.set_defaults(func=cmd_params)

    # --- timeline ---
    p = subparsers.add_parser("timeline", help="List scheduler events for a tick sequence")
    p.add_argument("-o", "--output", default=None, help="Optional JSON output path")
    p.add_argument("--length", type=float, default=5000.0, help="Timeline length ms")
    p.add_argument("--tick", type=float, default=16.0, help="Tick spacing ms")
    _add_effect_args(p)
    p.set_defaults(func=cmd_timeline)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    args.func(args)


if __name__ == "__main__":
    main()

"""Image loading, offline frame rendering, and video / PNG output."""

from __future__ import annotations

import os
from pathlib import Path

import numpy as np
from PIL import Image, ImageOps

from glitchfx.canvas import ArrayCanvas
from glitchfx.controller import EffectController
from glitchfx.core import frame_to_ms, frames_for_duration

# How a loaded image is brought to the requested (width, height).
FITS = {
    "cover": lambda img, size: ImageOps.fit(img, size, method=Image.Resampling.LANCZOS),
    "contain": lambda img, size: ImageOps.pad(
        img, size, method=Image.Resampling.LANCZOS, color=(0, 0, 0),
    ),
    "stretch": lambda img, size: img.resize(size, Image.Resampling.LANCZOS),
}


def load_image(
    path: str,
    resolution: tuple[int, int] | None = None,
    fit: str = "cover",
) -> np.ndarray:
    """Load an image as (H, W, 3) uint8 for painting onto an `ArrayCanvas`.

    Args:
        path: Any file Pillow can open.
        resolution: Output (width, height); the image's own size if None.
        fit: 'cover' crops to fill, 'contain' letterboxes with black,
            'stretch' ignores the aspect ratio.
    """
    if fit not in FITS:
        raise ValueError(f"Unknown fit mode: {fit}")
    with Image.open(path) as src:
        img = src.convert("RGB")
    if resolution is not None and img.size != tuple(resolution):
        img = FITS[fit](img, tuple(resolution))
    return np.array(img)


def render_frames(
    controller: EffectController,
    image: np.ndarray,
    duration_ms: float,
    fps: int = 30,
    background=0,
) -> list[np.ndarray]:
    """Run the effect over a still image and return one uint8 frame per tick.

    Frame i is rendered at t = i / fps on the controller's timeline.
    """
    canvas = ArrayCanvas.like(image, background=background)
    n_frames = frames_for_duration(duration_ms, fps)

    frames = []
    for i in range(n_frames):
        canvas.clear(background)
        controller.frame(frame_to_ms(i, fps), canvas, lambda: canvas.draw(image))
        frames.append(canvas.to_image())
    return frames


def write_video(
    frames: list[np.ndarray],
    output_path: str,
    fps: int = 30,
    codec: str = "libx264",
    crf: int = 18,
) -> None:
    """Write frames to a video file; '.gif' outputs an animated GIF.

    Args:
        frames: (H, W, 3) uint8 frames.
        output_path: Output file path.
        fps: Frame rate.
        codec: Video codec (ignored for GIF).
        crf: Constant rate factor (ignored for GIF).
    """
    if not frames:
        raise ValueError("No frames to write")

    from moviepy import VideoClip

    duration = len(frames) / fps

    def make_frame(t):
        idx = int(t * fps)
        idx = max(0, min(idx, len(frames) - 1))
        return frames[idx]

    video = VideoClip(make_frame, duration=duration).with_fps(fps)

    os.makedirs(os.path.dirname(os.path.abspath(output_path)), exist_ok=True)

    if Path(output_path).suffix.lower() == ".gif":
        video.write_gif(output_path, fps=fps, logger=None)
    else:
        video.write_videofile(
            output_path,
            codec=codec,
            fps=fps,
            audio=False,
            logger=None,
            ffmpeg_params=["-crf", str(crf)],
        )
    video.close()


def save_frames(frames: list[np.ndarray], directory: str, prefix: str = "frame") -> list[str]:
    """Write frames as a numbered PNG sequence, return the written paths."""
    out_dir = Path(directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    width = max(4, len(str(len(frames))))

    paths = []
    for i, frame in enumerate(frames):
        path = out_dir / f"{prefix}_{i:0{width}d}.png"
        Image.fromarray(frame).save(str(path))
        paths.append(str(path))
    return paths

"""GlitchParameters, Slice, EffectConfig, and shared time utilities."""

from __future__ import annotations

import json
from dataclasses import dataclass, field


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(float(value), hi))


@dataclass(frozen=True)
class Slice:
    """A horizontal band, in normalized [0, 1] surface height, displaced by `offset` px."""
    top: float
    bottom: float
    offset: float = 0.0

    def __post_init__(self):
        top = _clamp(self.top, 0.0, 1.0)
        bottom = max(top, _clamp(self.bottom, 0.0, 1.0))
        object.__setattr__(self, "top", top)
        object.__setattr__(self, "bottom", bottom)
        object.__setattr__(self, "offset", float(self.offset))

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def to_dict(self) -> dict:
        return {"top": self.top, "bottom": self.bottom, "offset": self.offset}

    @classmethod
    def from_dict(cls, d: dict) -> Slice:
        return cls(**d)


@dataclass(frozen=True)
class GlitchParameters:
    """One distortion sample: whole-content shift, ghost shift, and displaced bands."""
    offset_x: float = 0.0
    offset_y: float = 0.0
    chromatic_offset: float = 0.0
    slices: tuple[Slice, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "slices", tuple(self.slices))

    @property
    def is_idle(self) -> bool:
        return self == IDLE_PARAMETERS

    def to_dict(self) -> dict:
        return {
            "offset_x": float(self.offset_x),
            "offset_y": float(self.offset_y),
            "chromatic_offset": float(self.chromatic_offset),
            "slices": [s.to_dict() for s in self.slices],
        }

    @classmethod
    def from_dict(cls, d: dict) -> GlitchParameters:
        return cls(
            offset_x=d.get("offset_x", 0.0),
            offset_y=d.get("offset_y", 0.0),
            chromatic_offset=d.get("chromatic_offset", 0.0),
            slices=tuple(Slice.from_dict(s) for s in d.get("slices", [])),
        )


IDLE_PARAMETERS = GlitchParameters()


@dataclass(frozen=True)
class EffectConfig:
    """Timing configuration for one controller. All durations in milliseconds.

    Out-of-range values are clamped rather than rejected: negative durations
    become 0, and the resample range is forced to a non-empty integer range
    with a 1 ms floor.
    """
    enabled: bool = True
    initial_delay: float = 0.0
    glitch_duration: float = 500.0
    idle_interval: float = 2000.0
    resample_interval: tuple[int, int] = field(default=(30, 100))

    def __post_init__(self):
        object.__setattr__(self, "enabled", bool(self.enabled))
        for name in ("initial_delay", "glitch_duration", "idle_interval"):
            object.__setattr__(self, name, max(0.0, float(getattr(self, name))))

        lo, hi = self.resample_interval
        lo = max(1, int(lo))
        hi = max(lo + 1, int(hi))
        object.__setattr__(self, "resample_interval", (lo, hi))

    @property
    def period(self) -> float:
        return self.glitch_duration + self.idle_interval

    def to_dict(self) -> dict:
        return {
            "enabled": self.enabled,
            "initial_delay": self.initial_delay,
            "glitch_duration": self.glitch_duration,
            "idle_interval": self.idle_interval,
            "resample_interval": list(self.resample_interval),
        }

    def save(self, path: str) -> None:
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def from_dict(cls, d: dict) -> EffectConfig:
        known = {k: v for k, v in d.items() if k in cls.__dataclass_fields__}
        if "resample_interval" in known:
            known["resample_interval"] = tuple(known["resample_interval"])
        return cls(**known)

    @classmethod
    def load(cls, path: str) -> EffectConfig:
        with open(path) as f:
            return cls.from_dict(json.load(f))


# --- Utility functions ---

def frame_to_ms(frame_index: int, fps: int) -> float:
    """Timestamp of a frame on the host timeline."""
    return frame_index * 1000.0 / fps


def ms_to_frames(ms: float, fps: int) -> int:
    """Convert milliseconds to a whole frame count."""
    return int(round(ms * fps / 1000.0))


def frames_for_duration(duration_ms: float, fps: int) -> int:
    """How many frames needed for a given duration."""
    return max(1, ms_to_frames(duration_ms, fps))

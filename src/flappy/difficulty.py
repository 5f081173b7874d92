# src/flappy/difficulty.py
from __future__ import annotations
import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from .config import (
    BASE_HEIGHT, BASE_GRAVITY, BASE_FLAP, BASE_GAP, GAP_FRAC, GAP_FACTORS, SPEEDS,
    OBSTACLE_MIN_W, OBSTACLE_W_FRAC, SPACING_MIN, SPACING_FRAC,
    GROUND_MIN_H, GROUND_FRAC, ENTITY_MIN_R, ENTITY_BASE_R, AMBIENT_COLORS,
    ASPECT, MIN_WIDTH, MAX_WIDTH, MAX_PIXEL_RATIO,
)


class Mode(str, Enum):
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"

    @classmethod
    def parse(cls, value: "str | Mode") -> "Mode":
        if isinstance(value, Mode):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"unknown mode {value!r}, expected one of easy/normal/hard") from None


def round_half_up(v: float) -> int:
    """Round .5 away from zero for positives, like the browser's Math.round."""
    return int(math.floor(v + 0.5))


@dataclass(frozen=True)
class Profile:
    """
    Scaled physics/spawn constants for one (mode, viewport) pair.
    Immutable for a session: a mode or viewport change builds a new one.
    """
    mode: Mode
    viewport_width: int
    viewport_height: int
    gravity: float
    flap_impulse: float
    gap_height: int
    obstacle_width: int
    spacing: int
    speed: float
    ground_line: int
    entity_radius: int
    ambient_color: Tuple[int, int, int]

    @property
    def scale(self) -> float:
        return self.viewport_height / BASE_HEIGHT


def compute(mode: "str | Mode", viewport_width: float, viewport_height: float) -> Profile:
    """
    Map a mode and a viewport to its profile. Pure; any viewport is accepted.
    Raises ValueError for a mode name other than easy/normal/hard.
    """
    mode = Mode.parse(mode)
    w = max(0, round_half_up(viewport_width))
    h = max(0, round_half_up(viewport_height))
    s = h / BASE_HEIGHT

    base_gap = max(BASE_GAP * s, round_half_up(h * GAP_FRAC))
    return Profile(
        mode=mode,
        viewport_width=w,
        viewport_height=h,
        gravity=BASE_GRAVITY * s,
        flap_impulse=BASE_FLAP * s,
        gap_height=round_half_up(base_gap * GAP_FACTORS[mode.value]),
        obstacle_width=max(OBSTACLE_MIN_W, round_half_up(w * OBSTACLE_W_FRAC)),
        spacing=max(SPACING_MIN, round_half_up(w * SPACING_FRAC)),
        speed=SPEEDS[mode.value] * s,
        ground_line=round_half_up(h - max(GROUND_MIN_H, GROUND_FRAC * h)),
        entity_radius=max(ENTITY_MIN_R, round_half_up(ENTITY_BASE_R * s)),
        ambient_color=AMBIENT_COLORS[mode.value],
    )


def viewport_for_window(window_width: float) -> Tuple[int, int]:
    """2:1 viewport that follows the host window, clamped to [MIN_WIDTH, MAX_WIDTH]."""
    w = round_half_up(max(MIN_WIDTH, min(MAX_WIDTH, window_width)))
    return w, round_half_up(w / ASPECT)


def clamp_pixel_ratio(ratio: float | None) -> float:
    if not ratio:
        return 1.0
    return max(1.0, min(MAX_PIXEL_RATIO, float(ratio)))

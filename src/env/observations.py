# src/env/observations.py
from __future__ import annotations
from typing import List, Optional

import numpy as np

from src.flappy.difficulty import Profile
from src.flappy.world import Obstacle, WorldState

OBS_SIZE = 7
OBS_LOW = np.array([0.0, -1.0, 0.0, 0.0, 0.0, 0.0, 0.0], dtype=np.float32)
OBS_HIGH = np.ones(OBS_SIZE, dtype=np.float32)


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else (1.0 if x > 1.0 else x)


def upcoming(state: WorldState, profile: Profile) -> List[Obstacle]:
    """Obstacles whose right edge has not yet passed the entity's left edge, nearest first."""
    left = state.entity.x - state.entity.radius
    return [ob for ob in state.obstacles if ob.right(profile) >= left]


def build_observation(state: WorldState, profile: Profile) -> np.ndarray:
    """
    Compact observation vector, float32, shape (7,):
      [y_norm, vy_norm,
       dx_next, gap_top_next, gap_bottom_next,
       dx_after, gap_mid_after]
    Positions are divided by the viewport, vy by twice the flap impulse.
    Missing obstacles read as far away (dx=1) with a full-height gap.
    """
    W = max(1, profile.viewport_width)
    H = max(1, profile.viewport_height)
    ent = state.entity

    y_norm = _clamp01(ent.y / H)
    vy_max = max(1e-6, 2.0 * abs(profile.flap_impulse))
    vy_norm = max(-1.0, min(1.0, ent.vy / vy_max))

    ahead = upcoming(state, profile)
    nxt: Optional[Obstacle] = ahead[0] if ahead else None
    after: Optional[Obstacle] = ahead[1] if len(ahead) > 1 else None

    if nxt is not None:
        dx_next = _clamp01((nxt.x - ent.x) / W)
        top_next = _clamp01(nxt.gap_top / H)
        bot_next = _clamp01(nxt.gap_bottom(profile) / H)
    else:
        dx_next, top_next, bot_next = 1.0, 0.0, _clamp01(profile.ground_line / H)

    if after is not None:
        dx_after = _clamp01((after.x - ent.x) / W)
        mid_after = _clamp01((after.gap_top + profile.gap_height / 2) / H)
    else:
        dx_after, mid_after = 1.0, 0.5

    return np.array([y_norm, vy_norm, dx_next, top_next, bot_next, dx_after, mid_after],
                    dtype=np.float32)

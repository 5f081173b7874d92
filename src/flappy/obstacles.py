# src/flappy/obstacles.py
from __future__ import annotations
import itertools
import random
from typing import List, Optional, Tuple

from .config import MARGIN_FRAC, INITIAL_OBSTACLES, INITIAL_OFFSET_FRAC
from .difficulty import Profile, round_half_up
from .world import Obstacle


def gap_top_range(profile: Profile, viewport_height: int) -> Tuple[int, int]:
    """
    Inclusive [lo, hi] range for an obstacle's gap top so that the whole gap
    sits between the top margin and the margin above the ground line.

    On viewports too small to honour both margins the range collapses to a
    single value, max(0, max_allowed): the bottom margin is kept and the top
    margin gives way.
    """
    margin = round_half_up(MARGIN_FRAC * viewport_height)
    max_allowed = profile.ground_line - margin - profile.gap_height
    min_allowed = margin
    lo = max(0, min(min_allowed, max_allowed))
    hi = max(lo, max_allowed)
    return lo, hi


class ObstacleFactory:
    """
    Produces obstacles whose gap always fits the playfield.
    Seeded for reproducible layouts; a None seed picks a random one.
    """
    def __init__(self, seed: Optional[int] = None):
        if seed is None:
            seed = random.randrange(0, 2**32 - 1)
        self.seed = seed
        self.rng = random.Random(seed)
        self._ids = itertools.count(1)

    def make_at(self, x: float, profile: Profile, viewport_height: Optional[int] = None) -> Obstacle:
        if viewport_height is None:
            viewport_height = profile.viewport_height
        lo, hi = gap_top_range(profile, viewport_height)
        return Obstacle(id=next(self._ids), x=float(x), gap_top=self.rng.randint(lo, hi))

    def generate_initial(self, viewport_width: int, profile: Profile) -> List[Obstacle]:
        """Seed the queue off-screen to the right, one spacing apart."""
        start_x = viewport_width + round_half_up(profile.spacing * INITIAL_OFFSET_FRAC)
        return [self.make_at(start_x + i * profile.spacing, profile)
                for i in range(INITIAL_OBSTACLES)]

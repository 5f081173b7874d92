# src/flappy/world.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Set

from .config import ENTITY_X_FRAC, ENTITY_Y_FRAC
from .difficulty import Profile, round_half_up


@dataclass
class Entity:
    """
    The player body. x never changes during a session; y grows downward.
    wing_angle is cosmetic only and is never read by physics.
    """
    x: float
    y: float
    vy: float
    radius: int
    wing_angle: float = 0.0

    @property
    def top(self) -> float:
        return self.y - self.radius

    @property
    def bottom(self) -> float:
        return self.y + self.radius


@dataclass
class Obstacle:
    """A top/bottom barrier pair. Gap height and width live on the Profile."""
    id: int
    x: float
    gap_top: int

    def gap_bottom(self, profile: Profile) -> int:
        return self.gap_top + profile.gap_height

    def right(self, profile: Profile) -> float:
        return self.x + profile.obstacle_width

    def center(self, profile: Profile) -> float:
        return self.x + profile.obstacle_width / 2


@dataclass
class WorldState:
    entity: Entity
    obstacles: List[Obstacle] = field(default_factory=list)   # ordered left to right
    score: int = 0
    scored: Set[int] = field(default_factory=set)             # obstacle ids already credited
    terminal: bool = False
    running: bool = False
    paused: bool = False
    tick_count: int = 0                                       # drives cosmetic animation only

    @classmethod
    def idle(cls, profile: Profile) -> "WorldState":
        """A not-yet-running world with the entity parked at its start position."""
        return cls(entity=start_entity(profile))

    @property
    def status(self) -> str:
        if not self.running:
            return "idle"
        if self.terminal:
            return "terminal"
        if self.paused:
            return "paused"
        return "running"


def start_entity(profile: Profile) -> Entity:
    return Entity(
        x=float(round_half_up(profile.viewport_width * ENTITY_X_FRAC)),
        y=float(round_half_up(profile.viewport_height * ENTITY_Y_FRAC)),
        vy=0.0,
        radius=profile.entity_radius,
    )

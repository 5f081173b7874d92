# src/flappy/simulation.py
from __future__ import annotations
import logging
from enum import Enum
from typing import List, Optional

from .config import OFFSCREEN_PAD, WING_FLAP_ANGLE, WING_RELAX
from .difficulty import Profile
from .obstacles import ObstacleFactory
from .world import WorldState, start_entity

logger = logging.getLogger(__name__)


class Event(str, Enum):
    FLAP = "flap"
    SCORE = "score"
    TERMINAL = "terminal"


class SimulationEngine:
    """
    Advances a WorldState one discrete tick at a time.

    The engine is the only mutator of the world. Side effects (sound, best
    score persistence) are left to the caller, which receives the events that
    happened during the call.
    """
    def __init__(self, factory: Optional[ObstacleFactory] = None):
        self.factory = factory if factory is not None else ObstacleFactory()

    # -------------------- Lifecycle --------------------

    def reset(self, state: WorldState, profile: Profile) -> WorldState:
        """Re-seed a session in place: fresh entity, queue and score, running."""
        state.entity = start_entity(profile)
        state.obstacles = self.factory.generate_initial(profile.viewport_width, profile)
        state.scored.clear()
        state.score = 0
        state.terminal = False
        state.running = True
        state.paused = False
        return state

    def flap(self, state: WorldState, profile: Profile) -> bool:
        """Set vy to the flap impulse. Repeated flaps overwrite, they never stack."""
        if not state.running or state.paused or state.terminal:
            return False
        state.entity.vy = profile.flap_impulse
        state.entity.wing_angle = WING_FLAP_ANGLE
        return True

    def toggle_pause(self, state: WorldState) -> bool:
        if not state.running or state.terminal:
            return False
        state.paused = not state.paused
        return True

    # -------------------- Tick --------------------

    def tick(self, state: WorldState, profile: Profile, viewport_width: int) -> List[Event]:
        if not state.running or state.paused or state.terminal:
            return []
        events: List[Event] = []
        ent = state.entity
        r = ent.radius

        # 1) integrate
        ent.vy += profile.gravity
        ent.y += ent.vy
        if ent.wing_angle < 0.0:
            ent.wing_angle = min(ent.wing_angle + WING_RELAX, 0.0)

        # 2) scroll
        for ob in state.obstacles:
            ob.x -= profile.speed

        # 3) recycle
        obstacles = state.obstacles
        while obstacles and obstacles[0].right(profile) < -OFFSCREEN_PAD:
            gone = obstacles.pop(0)
            state.scored.discard(gone.id)
            last_x = obstacles[-1].x if obstacles else gone.x
            obstacles.append(self.factory.make_at(last_x + profile.spacing, profile))
        if not obstacles:
            obstacles.extend(self.factory.generate_initial(viewport_width, profile))

        # 4) ground is fatal, ceiling is soft
        if ent.y + r > profile.ground_line:
            ent.y = profile.ground_line - r
            self._enter_terminal(state, events)
            return events
        if ent.y - r < 0:
            ent.y = r
            ent.vy = 0.0

        # 5) obstacles, left to right
        for ob in obstacles:
            left = ob.x
            right = ob.right(profile)
            if ent.x + r > left and ent.x - r < right:
                if ent.y - r < ob.gap_top or ent.y + r > ob.gap_bottom(profile):
                    self._enter_terminal(state, events)
                    return events
            if ob.center(profile) < ent.x and ob.id not in state.scored:
                state.scored.add(ob.id)
                state.score += 1
                events.append(Event.SCORE)

        # 6) cosmetic phase
        state.tick_count += 1
        return events

    def _enter_terminal(self, state: WorldState, events: List[Event]) -> None:
        if state.terminal:
            return
        state.terminal = True
        state.paused = True
        events.append(Event.TERMINAL)
        logger.info("session over with score %d", state.score)

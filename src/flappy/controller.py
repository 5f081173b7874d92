# src/flappy/controller.py
from __future__ import annotations
import logging
from typing import List, Optional, Tuple

import pygame

from .audio import SoundBoard
from .config import WIDTH
from .difficulty import Mode, Profile, compute, viewport_for_window
from .input import Action, InputController, Intent
from .obstacles import ObstacleFactory
from .persistence import MemoryBestScoreStore
from .renderer import Renderer
from .scheduler import FrameScheduler
from .simulation import Event, SimulationEngine
from .world import WorldState

logger = logging.getLogger(__name__)


class GameController:
    """
    Owns one game: the profile, the world, the frame scheduler and the
    side effects (sound, best score). Input flows in through handle_event()
    or dispatch(); the host loop calls frame() once per display refresh.
    """
    def __init__(self,
                 mode: "str | Mode" = Mode.NORMAL,
                 window_width: float = WIDTH,
                 store=None,
                 sounds: Optional[SoundBoard] = None,
                 seed: Optional[int] = None,
                 pixel_ratio: float = 1.0):
        self.store = store if store is not None else MemoryBestScoreStore()
        self.sounds = sounds if sounds is not None else SoundBoard(enabled=False)
        self.engine = SimulationEngine(ObstacleFactory(seed))
        self.renderer = Renderer(pixel_ratio)
        self.input = InputController()
        self.scheduler = FrameScheduler(self._tick)

        self.viewport: Tuple[int, int] = viewport_for_window(window_width)
        self.profile: Profile = compute(mode, *self.viewport)
        self.state = WorldState.idle(self.profile)
        self.best = self.store.load()
        self.events: List[Event] = []   # events from the most recent tick

    # -------------------- properties --------------------

    @property
    def mode(self) -> Mode:
        return self.profile.mode

    @property
    def backing_size(self) -> Tuple[int, int]:
        w, h = self.viewport
        k = self.renderer.pixel_ratio
        return int(round(w * k)), int(round(h * k))

    # -------------------- input --------------------

    def handle_event(self, event: pygame.event.Event) -> Optional[Intent]:
        if event.type == pygame.VIDEORESIZE:
            self.resize(event.w / self.renderer.pixel_ratio)
            return None
        intent = self.input.translate(event)
        if intent is not None:
            self.dispatch(intent)
        return intent

    def dispatch(self, intent: Intent) -> None:
        self.sounds.ensure()
        action = intent.action
        if action is Action.FLAP:
            self.flap()
        elif action is Action.START:
            if not self.state.running or self.state.terminal:
                self.restart()
        elif action is Action.TOGGLE_PAUSE:
            self.toggle_pause()
        elif action is Action.RESTART:
            self.restart()
        elif action is Action.CHANGE_MODE and intent.mode is not None:
            self.set_mode(intent.mode)

    def flap(self) -> None:
        if not self.state.running or self.state.terminal:
            self.restart()
            return
        if self.engine.flap(self.state, self.profile):
            self.sounds.play(Event.FLAP.value)

    def toggle_pause(self) -> None:
        if not self.engine.toggle_pause(self.state):
            return
        if self.state.paused:
            self.scheduler.cancel()
        else:
            self.scheduler.start()
        logger.debug("paused=%s", self.state.paused)

    # -------------------- lifecycle --------------------

    def restart(self) -> None:
        """New session on the current profile; tears down and restarts the loop."""
        self.engine.reset(self.state, self.profile)
        self.scheduler.restart()
        logger.info("session started (mode=%s, viewport=%dx%d, seed=%s)",
                    self.mode.value, *self.viewport, self.engine.factory.seed)

    def set_mode(self, mode: "str | Mode") -> None:
        self.profile = compute(mode, *self.viewport)
        logger.info("mode changed to %s", self.profile.mode.value)
        self.restart()

    def resize(self, window_width: float) -> bool:
        """Follow the host window. A changed viewport re-seeds the session."""
        viewport = viewport_for_window(window_width)
        if viewport == self.viewport:
            return False
        self.viewport = viewport
        self.profile = compute(self.profile.mode, *viewport)
        logger.info("viewport resized to %dx%d", *viewport)
        self.restart()
        return True

    def shutdown(self) -> None:
        self.scheduler.cancel()

    # -------------------- frame --------------------

    def _tick(self) -> None:
        self.events = self.engine.tick(self.state, self.profile, self.viewport[0])
        for ev in self.events:
            if ev is Event.SCORE:
                self.sounds.play(ev.value)
                self._record_best()
            elif ev is Event.TERMINAL:
                self.scheduler.cancel()
                self.sounds.play(ev.value)

    def _record_best(self) -> None:
        if self.state.score > self.best:
            self.best = self.state.score
            self.store.save(self.best)
            logger.debug("new best %d", self.best)

    def frame(self, surface: Optional[pygame.Surface] = None) -> None:
        """One display refresh: tick if scheduled, then redraw (even while suspended)."""
        self.events = []
        self.scheduler.pump()
        if surface is not None:
            self.renderer.render(self.state, self.profile, surface, self.best)

# src/env/flappy_env.py
from __future__ import annotations
from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
import pygame

from src.flappy.config import FPS
from src.flappy.difficulty import Mode, Profile, compute, viewport_for_window
from src.flappy.obstacles import ObstacleFactory
from src.flappy.renderer import Renderer
from src.flappy.simulation import Event, SimulationEngine
from src.flappy.world import WorldState
from src.env.observations import build_observation, OBS_LOW, OBS_HIGH

SCORE_REWARD = 5.0


class FlappyEnv(gym.Env):
    """
    Flappy Modes Gymnasium environment (vector observations).
    - One simulation tick per frame; the agent acts every `frame_skip` frames.
    - Actions: 0 = NOOP, 1 = FLAP.
    - Observation: shape (7,), float32 (see build_observation).
    - Reward: +1 per decision survived, +5 per obstacle passed, -1 on death.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 mode: "str | Mode" = Mode.NORMAL,
                 frame_skip: int = 2,
                 viewport_width: int = 960,
                 time_limit_seconds: Optional[float] = 60.0):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.viewport = viewport_for_window(viewport_width)
        self.profile: Profile = compute(mode, *self.viewport)

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(FPS * time_limit_seconds / self.frame_skip)

        # --- Gym spaces ---
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=OBS_LOW, high=OBS_HIGH, dtype=np.float32)

        # --- Runtime state ---
        self.engine: Optional[SimulationEngine] = None
        self.state: Optional[WorldState] = None
        self.timestep: int = 0
        self.current_seed: Optional[int] = None

        # Rendering
        self.renderer: Optional[Renderer] = None
        self.screen = None
        self.clock = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # The layout seed always comes from np_random so reset(seed=s) is reproducible.
        layout_seed = int(self.np_random.integers(0, 2**31 - 1))
        if options and "mode" in options:
            self.profile = compute(options["mode"], *self.viewport)

        self.engine = SimulationEngine(ObstacleFactory(layout_seed))
        self.state = WorldState.idle(self.profile)
        self.engine.reset(self.state, self.profile)

        self.timestep = 0
        self.current_seed = layout_seed

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0, "mode": self.profile.mode.value}
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.engine is not None and self.state is not None, "call reset() first"

        if action == 1:
            self.engine.flap(self.state, self.profile)

        reward = 0.0
        for _ in range(self.frame_skip):
            events = self.engine.tick(self.state, self.profile, self.viewport[0])
            reward += SCORE_REWARD * events.count(Event.SCORE)
            if self.state.terminal:
                break

        reward += -1.0 if self.state.terminal else 1.0

        self.timestep += 1
        terminated = self.state.terminal
        truncated = (self.time_limit_decisions is not None
                     and self.timestep >= self.time_limit_decisions)

        obs = self._get_obs()
        info = {
            "score": self.state.score,
            "timestep": self.timestep,
            "seed": self.current_seed,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.state is not None
        return build_observation(self.state, self.profile)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.state is None:
            return None

        if self.renderer is None:
            pygame.init()
            self.renderer = Renderer()
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode(self.viewport)
                pygame.display.set_caption("Flappy Modes — Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface(self.viewport)

        self.renderer.render(self.state, self.profile, self.screen)

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            if self.clock is not None:
                self.clock.tick(self.metadata["render_fps"])
            return None

        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.renderer = None

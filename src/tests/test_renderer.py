# src/tests/test_renderer.py
import copy

import pygame
import pytest

from src.flappy.config import COLOR_GROUND, COLOR_PIPE, AMBIENT_COLORS, CLOUD_LAYERS
from src.flappy.difficulty import compute
from src.flappy.obstacles import ObstacleFactory
from src.flappy.renderer import Renderer, cloud_x, tilt_angle
from src.flappy.simulation import SimulationEngine
from src.flappy.world import WorldState

W, H = 960, 480


@pytest.fixture(scope="module", autouse=True)
def _pygame():
    pygame.init()
    yield
    pygame.quit()


def rgb(surface, x, y):
    return tuple(surface.get_at((x, y)))[:3]


def running_world(mode="normal"):
    profile = compute(mode, W, H)
    engine = SimulationEngine(ObstacleFactory(3))
    state = engine.reset(WorldState.idle(profile), profile)
    return profile, engine, state


@pytest.mark.parametrize("status", ["idle", "running", "paused", "terminal"])
def test_render_every_lifecycle_state(status):
    profile, engine, state = running_world()
    if status == "idle":
        state = WorldState.idle(profile)
    elif status == "paused":
        state.paused = True
    elif status == "terminal":
        state.terminal = state.paused = True
    assert state.status == status
    surface = pygame.Surface((W, H))
    Renderer().render(state, profile, surface, best=3)
    assert rgb(surface, 5, profile.ground_line + 5) == COLOR_GROUND


def test_render_does_not_touch_the_world():
    profile, engine, state = running_world()
    for _ in range(120):
        engine.tick(state, profile, W)
        engine.flap(state, profile)
    before = copy.deepcopy(state)
    Renderer().render(state, profile, pygame.Surface((W, H)), best=0)
    assert state == before


@pytest.mark.parametrize("mode", ["easy", "hard"])
def test_solid_ambient_background(mode):
    profile, _, state = running_world(mode)
    surface = pygame.Surface((W, H))
    Renderer().render(state, profile, surface)
    assert rgb(surface, W - 2, profile.ground_line - 3) == AMBIENT_COLORS[mode]


def test_pixel_ratio_scales_the_backing_surface():
    profile, _, state = running_world()
    surface = pygame.Surface((W * 2, H * 2))
    Renderer(pixel_ratio=2).render(state, profile, surface)
    assert rgb(surface, 10, 2 * profile.ground_line + 10) == COLOR_GROUND


def test_obstacles_are_drawn_above_and_below_the_gap():
    profile, _, state = running_world("easy")
    ob = state.obstacles[0]
    ob.x = 600
    surface = pygame.Surface((W, H))
    Renderer().render(state, profile, surface)
    cx = int(ob.x + profile.obstacle_width / 2)
    gap_mid = int(ob.gap_top + profile.gap_height / 2)
    assert rgb(surface, cx, gap_mid) != COLOR_PIPE
    assert rgb(surface, cx, ob.gap_top - 5) == COLOR_PIPE
    assert rgb(surface, cx, ob.gap_bottom(profile) + 5) == COLOR_PIPE


def test_cloud_positions_wrap():
    rate, step, *_ = CLOUD_LAYERS[0]
    for t in range(0, 5000, 37):
        for i in range(9):
            x = cloud_x(i, step, t * rate, W)
            assert -step / 2 <= x < W + step / 2
    # deeper layers move faster
    slow = cloud_x(0, 240, 10 * CLOUD_LAYERS[0][0], W)
    fast = cloud_x(0, 240, 10 * CLOUD_LAYERS[2][0], W)
    assert fast < slow


def test_tilt_is_clamped():
    assert tilt_angle(-100) == pytest.approx(-0.6)
    assert tilt_angle(100) == pytest.approx(0.8)
    assert tilt_angle(2) == pytest.approx(0.2)

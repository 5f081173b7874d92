# src/flappy/renderer.py
from __future__ import annotations
import math
from typing import Dict, Optional, Tuple

import pygame

from .config import (
    CLOUD_LAYERS, TILT_MIN, TILT_MAX, FONT_NAME, HUD_FONT_SIZE, HINT_FONT_SIZE, TITLE_FONT_SIZE,
    COLOR_SKY_TOP, COLOR_SKY_BOTTOM, COLOR_CLOUD, COLOR_GROUND, COLOR_PIPE, COLOR_PIPE_EDGE,
    COLOR_BODY, COLOR_WING, COLOR_EYE, COLOR_PUPIL, COLOR_BEAK,
    COLOR_TEXT_LIGHT, COLOR_TEXT_DARK, COLOR_SHADOW,
)
from .difficulty import Mode, Profile, clamp_pixel_ratio
from .world import WorldState

Color = Tuple[int, int, int]


def cloud_x(index: int, step: float, phase: float, width: float) -> float:
    """Horizontal position of one cloud: each layer wraps over width + step."""
    span = width + step
    return ((index * step - phase) % span) - step / 2


def tilt_angle(vy: float) -> float:
    """Visual tilt in radians, positive = nose down. Never fed back to physics."""
    return max(TILT_MIN, min(TILT_MAX, vy / 10.0))


class Renderer:
    """
    Draws a WorldState onto a pygame Surface, back to front.

    Reads the world and profile only. Logical coordinates are CSS-like pixels;
    `pixel_ratio` multiplies them into backing pixels of the target surface.
    """
    def __init__(self, pixel_ratio: float = 1.0):
        self.pixel_ratio = clamp_pixel_ratio(pixel_ratio)
        self._fonts: Dict[int, pygame.font.Font] = {}
        self._sky: Optional[pygame.Surface] = None

    # -------------------- helpers --------------------

    def _px(self, v: float) -> int:
        return int(round(v * self.pixel_ratio))

    def _rect(self, x: float, y: float, w: float, h: float) -> pygame.Rect:
        return pygame.Rect(self._px(x), self._px(y), max(0, self._px(w)), max(0, self._px(h)))

    def _font(self, size: int) -> pygame.font.Font:
        px = max(1, self._px(size))
        if px not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            self._fonts[px] = pygame.font.SysFont(FONT_NAME, px)
        return self._fonts[px]

    # -------------------- entry point --------------------

    def render(self, state: WorldState, profile: Profile, surface: pygame.Surface, best: int = 0) -> None:
        W, H = profile.viewport_width, profile.viewport_height
        self._draw_background(surface, profile)

        t = state.tick_count
        for rate, step, y_frac, r_base, count in CLOUD_LAYERS:
            self._draw_cloud_layer(surface, W, H, t * rate, step, y_frac, r_base, count)

        pygame.draw.rect(surface, COLOR_GROUND,
                         self._rect(0, profile.ground_line, W, H - profile.ground_line))

        self._draw_obstacles(surface, state, profile)
        self._draw_entity(surface, state)
        self._draw_hud(surface, state, profile, best)

    # -------------------- layers --------------------

    def _draw_background(self, surface: pygame.Surface, profile: Profile) -> None:
        if profile.mode is not Mode.NORMAL:
            surface.fill(profile.ambient_color)
            return
        size = surface.get_size()
        if self._sky is None or self._sky.get_size() != size:
            self._sky = pygame.Surface(size)
            w, h = size
            for row in range(h):
                f = row / max(1, h - 1)
                color = tuple(int(a + (b - a) * f) for a, b in zip(COLOR_SKY_TOP, COLOR_SKY_BOTTOM))
                pygame.draw.line(self._sky, color, (0, row), (w, row))
        surface.blit(self._sky, (0, 0))

    def _draw_cloud_layer(self, surface, W, H, phase, step, y_frac, r_base, count) -> None:
        for i in range(count):
            x = cloud_x(i, step, phase, W)
            y = round(y_frac * H) + (i % 3) * round(0.04 * H)
            self._cloud(surface, x, y, r_base + (i % 4) * 6)

    def _cloud(self, surface, x: float, y: float, r: float) -> None:
        puffs = ((0, 0, 1.0), (r, 4, 0.75), (-r, 6, 0.7), (r * 1.6, 2, 0.6), (-r * 1.4, 3, 0.55))
        for dx, dy, k in puffs:
            pygame.draw.circle(surface, COLOR_CLOUD, (self._px(x + dx), self._px(y + dy)),
                               max(1, self._px(r * k)))

    def _draw_obstacles(self, surface, state: WorldState, profile: Profile) -> None:
        w = profile.obstacle_width
        edge = max(1, self._px(2))
        for ob in state.obstacles:
            bottom_y = ob.gap_bottom(profile)
            for rect in (self._rect(ob.x, 0, w, ob.gap_top),
                         self._rect(ob.x, bottom_y, w, profile.ground_line - bottom_y)):
                pygame.draw.rect(surface, COLOR_PIPE, rect)
                pygame.draw.rect(surface, COLOR_PIPE_EDGE, rect, width=edge)

    def _draw_entity(self, surface, state: WorldState) -> None:
        ent = state.entity
        r = ent.radius
        # Sprite canvas is wide enough for the beak; the body sits at its centre.
        half = r + 12
        sprite = pygame.Surface((self._px(half * 2), self._px(half * 2)), pygame.SRCALPHA)

        def at(x: float, y: float) -> Tuple[int, int]:
            return self._px(half + x), self._px(half + y)

        body = pygame.Rect(*at(-r, -r), self._px(2 * r), self._px(2 * r))
        pygame.draw.rect(sprite, COLOR_BODY, body, border_radius=self._px(8))

        # Wing rotates with the cosmetic wing angle around its root.
        wing_len, wing_h = 16, 8
        a = ent.wing_angle
        root = (-8.0, 0.0)
        tip = (root[0] + wing_len * math.cos(a), root[1] + wing_len * math.sin(a))
        pygame.draw.line(sprite, COLOR_WING, at(*root), at(*tip), max(1, self._px(wing_h)))

        pygame.draw.circle(sprite, COLOR_EYE, at(6, -6), self._px(4))
        pygame.draw.circle(sprite, COLOR_PUPIL, at(7, -6), max(1, self._px(2)))
        pygame.draw.polygon(sprite, COLOR_BEAK, [at(r, 0), at(r + 10, 4), at(r, 8)])

        rotated = pygame.transform.rotate(sprite, -math.degrees(tilt_angle(ent.vy)))
        dest = rotated.get_rect(center=(self._px(ent.x), self._px(ent.y)))
        surface.blit(rotated, dest)

    def _draw_hud(self, surface, state: WorldState, profile: Profile, best: int) -> None:
        W, H = profile.viewport_width, profile.viewport_height
        hud = f"Score: {state.score}   Best: {best}   Mode: {profile.mode.value}"
        self._shadow_text(surface, hud, 12, 10, HUD_FONT_SIZE, profile, center=False)

        if not state.running:
            self._shadow_text(surface, "Tap/Click/Space to start", W / 2, H / 2 - 12, HINT_FONT_SIZE, profile)
        elif state.terminal:
            self._shadow_text(surface, "Game Over", W / 2, H / 2 - 30, TITLE_FONT_SIZE, profile)
            self._shadow_text(surface, "Press Space to Restart", W / 2, H / 2 + 20, HINT_FONT_SIZE, profile)
        elif state.paused:
            self._shadow_text(surface, "Paused", W / 2, H / 2 - 12, HINT_FONT_SIZE, profile)

    def _shadow_text(self, surface, text: str, x: float, y: float, size: int,
                     profile: Profile, center: bool = True) -> None:
        font = self._font(size)
        fg: Color = COLOR_TEXT_LIGHT if profile.mode is Mode.NORMAL else COLOR_TEXT_DARK
        shadow = font.render(text, True, COLOR_SHADOW)
        shadow.set_alpha(115)
        label = font.render(text, True, fg)
        px, py = self._px(x), self._px(y)
        if center:
            px -= label.get_width() // 2
        off = max(1, self._px(2))
        surface.blit(shadow, (px + off, py + off))
        surface.blit(label, (px, py))

# src/flappy/input.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

import pygame

from .difficulty import Mode


class Action(str, Enum):
    FLAP = "flap"
    START = "start"
    TOGGLE_PAUSE = "toggle_pause"
    RESTART = "restart"
    CHANGE_MODE = "change_mode"


@dataclass(frozen=True)
class Intent:
    action: Action
    mode: Optional[Mode] = None   # only set for CHANGE_MODE


FLAP_KEYS = (pygame.K_SPACE, pygame.K_UP)
START_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER)
MODE_KEYS: Dict[int, Mode] = {
    pygame.K_1: Mode.EASY,
    pygame.K_2: Mode.NORMAL,
    pygame.K_3: Mode.HARD,
}


class InputController:
    """Translates discrete pygame events into game intents. Anything else maps to None."""

    def translate(self, event: pygame.event.Event) -> Optional[Intent]:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            # SDL mirrors each tap as a mouse click; FINGERDOWN already covers it
            if getattr(event, "touch", False):
                return None
            return Intent(Action.FLAP)
        if event.type == pygame.FINGERDOWN:
            return Intent(Action.FLAP)
        if event.type != pygame.KEYDOWN:
            return None

        key = event.key
        if key in FLAP_KEYS:
            return Intent(Action.FLAP)
        if key == pygame.K_p:
            return Intent(Action.TOGGLE_PAUSE)
        if key == pygame.K_r:
            return Intent(Action.RESTART)
        if key in START_KEYS:
            return Intent(Action.START)
        if key in MODE_KEYS:
            return Intent(Action.CHANGE_MODE, MODE_KEYS[key])
        return None

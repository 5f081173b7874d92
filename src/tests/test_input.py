# src/tests/test_input.py
import pygame
import pytest

from src.flappy.difficulty import Mode
from src.flappy.input import Action, InputController


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k)


@pytest.mark.parametrize("event,action", [
    (key(pygame.K_SPACE), Action.FLAP),
    (key(pygame.K_UP), Action.FLAP),
    (key(pygame.K_p), Action.TOGGLE_PAUSE),
    (key(pygame.K_r), Action.RESTART),
    (key(pygame.K_RETURN), Action.START),
    (pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10)), Action.FLAP),
    (pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.5, finger_id=0, touch_id=0), Action.FLAP),
])
def test_event_maps_to_action(event, action):
    intent = InputController().translate(event)
    assert intent is not None and intent.action is action
    assert intent.mode is None


@pytest.mark.parametrize("k,mode", [(pygame.K_1, Mode.EASY), (pygame.K_2, Mode.NORMAL), (pygame.K_3, Mode.HARD)])
def test_mode_selector(k, mode):
    intent = InputController().translate(key(k))
    assert intent.action is Action.CHANGE_MODE and intent.mode is mode


@pytest.mark.parametrize("event", [
    key(pygame.K_x),
    pygame.event.Event(pygame.KEYUP, key=pygame.K_SPACE),
    pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=3, pos=(0, 0)),
    pygame.event.Event(pygame.MOUSEMOTION, pos=(0, 0), rel=(1, 1), buttons=(0, 0, 0)),
])
def test_other_events_are_ignored(event):
    assert InputController().translate(event) is None


def test_touch_generated_click_is_ignored():
    # one tap arrives as FINGERDOWN plus a mirrored left click flagged touch=True
    ctl = InputController()
    tap = pygame.event.Event(pygame.FINGERDOWN, x=0.5, y=0.5, finger_id=0, touch_id=0)
    mirrored = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(10, 10), touch=True)
    assert ctl.translate(tap).action is Action.FLAP
    assert ctl.translate(mirrored) is None

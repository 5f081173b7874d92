# src/flappy/audio.py
from __future__ import annotations
import logging
from typing import Dict, Optional

import numpy as np
import pygame

from .config import SAMPLE_RATE, TONES

logger = logging.getLogger(__name__)


def synthesize(freq: float, duration: float, waveform: str, gain: float,
               sample_rate: int = SAMPLE_RATE) -> np.ndarray:
    """Mono float32 samples in [-gain, gain] for one short tone."""
    n = max(1, int(sample_rate * duration))
    t = np.arange(n, dtype=np.float64) / sample_rate
    phase = (t * freq) % 1.0
    if waveform == "square":
        wave = np.where(phase < 0.5, 1.0, -1.0)
    elif waveform == "triangle":
        wave = 4.0 * np.abs(phase - 0.5) - 1.0
    elif waveform == "sawtooth":
        wave = 2.0 * phase - 1.0
    else:
        wave = np.sin(2.0 * np.pi * phase)
    return (wave * gain).astype(np.float32)


class SoundBoard:
    """
    The flap/score/terminal tones. Any mixer failure disables audio for the
    rest of the process; play() then does nothing.
    """
    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._ready = False

    def ensure(self) -> bool:
        """Lazily open the mixer and build the tones. Returns whether audio is usable."""
        if not self.enabled:
            return False
        if self._ready:
            return True
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            rate, _size, channels = pygame.mixer.get_init()
            for name, (freq, dur, waveform, gain) in TONES.items():
                self._sounds[name] = self._make_sound(synthesize(freq, dur, waveform, gain, rate), channels)
        except (pygame.error, TypeError, ValueError) as e:
            logger.warning("audio disabled: %s", e)
            self.enabled = False
            self._sounds.clear()
            return False
        self._ready = True
        return True

    @staticmethod
    def _make_sound(samples: np.ndarray, channels: int) -> pygame.mixer.Sound:
        pcm = (samples * 32767).astype(np.int16)
        if channels > 1:
            pcm = np.repeat(pcm[:, None], channels, axis=1)
        return pygame.sndarray.make_sound(np.ascontiguousarray(pcm))

    def play(self, name: str) -> Optional[pygame.mixer.Channel]:
        if not self.ensure():
            return None
        sound = self._sounds.get(name)
        if sound is None:
            return None
        try:
            return sound.play()
        except pygame.error as e:
            logger.debug("could not play %s: %s", name, e)
            return None

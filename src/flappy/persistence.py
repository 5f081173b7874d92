# src/flappy/persistence.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Optional, Union

from .config import BEST_SCORE_KEY, BEST_SCORE_PATH

logger = logging.getLogger(__name__)


class MemoryBestScoreStore:
    """Process-local store; also what the game falls back to when nothing is persisted."""
    def __init__(self, value: int = 0):
        self.value = int(value)
        self.writes = 0

    def load(self) -> int:
        return self.value

    def save(self, value: int) -> None:
        self.value = int(value)
        self.writes += 1


class JsonBestScoreStore:
    """
    Best score as {"flappy_best": <int>} in a small JSON file.
    Read and write failures are logged and swallowed: an unreadable file is
    the same as no stored best.
    """
    def __init__(self, path: Optional[Union[str, Path]] = None, key: str = BEST_SCORE_KEY):
        self.path = Path(path) if path is not None else BEST_SCORE_PATH
        self.key = key

    def load(self) -> int:
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return 0
        except (OSError, ValueError) as e:
            logger.warning("ignoring unreadable best score file %s: %s", self.path, e)
            return 0
        value = data.get(self.key) if isinstance(data, dict) else None
        try:
            value = int(value)
        except (TypeError, ValueError):
            logger.warning("ignoring malformed best score %r in %s", value, self.path)
            return 0
        return max(0, value)

    def save(self, value: int) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(self.path.suffix + ".tmp")
            with tmp.open("w", encoding="utf-8") as f:
                json.dump({self.key: int(value)}, f)
            tmp.replace(self.path)
        except OSError as e:
            logger.warning("could not write best score to %s: %s", self.path, e)

# src/flappy/scheduler.py
from __future__ import annotations
from contextlib import contextmanager
from typing import Callable, Iterator, Optional


class FrameScheduler:
    """
    A cancellable repeating per-frame task.

    The host loop calls pump() once per display frame; the callback only runs
    while a handle is live. Every start() issues a new handle, so a callback
    scheduled under an older handle can never fire after cancel().
    """
    def __init__(self, callback: Callable[[], None]):
        self._callback = callback
        self._handle: Optional[int] = None
        self._generation = 0
        self.frames = 0      # callbacks actually run, across all handles

    @property
    def active(self) -> bool:
        return self._handle is not None

    @property
    def handle(self) -> Optional[int]:
        return self._handle

    def start(self) -> int:
        if self._handle is None:
            self._generation += 1
            self._handle = self._generation
        return self._handle

    def cancel(self) -> None:
        self._handle = None

    def restart(self) -> int:
        self.cancel()
        return self.start()

    def pump(self) -> bool:
        """Run one frame if scheduled. Returns whether the callback ran."""
        if self._handle is None:
            return False
        self._callback()
        self.frames += 1
        return True

    @contextmanager
    def scoped(self) -> Iterator[int]:
        handle = self.start()
        try:
            yield handle
        finally:
            self.cancel()

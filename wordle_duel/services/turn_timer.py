"""
Turn Timer

Per-room countdown for shared-turn games. The countdown runs as a Socket.IO
background task and calls back into the room when it reaches zero.
"""

import threading
from typing import Callable, Optional


class TurnTimer:
    """
    Cancellable one-second-step countdown.

    ``scheduler`` is anything exposing ``start_background_task(fn, *args)``
    and ``sleep(seconds)``; a ``SocketIO`` instance does. Without a
    scheduler the timer only tracks its generation and never fires.

    Every start() and cancel() bumps the generation, so a countdown started
    earlier notices it is stale after its next sleep and exits without
    firing. ``on_expire`` receives the generation it was started with and
    must check ``is_current`` under the room lock before acting.
    """

    def __init__(self, duration: int, on_expire: Callable[[int], None], scheduler=None):
        self.duration = duration
        self.on_expire = on_expire
        self.scheduler = scheduler
        self.remaining = duration
        self._generation = 0
        self._running = False
        self._lock = threading.Lock()

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def running(self) -> bool:
        return self._running

    def is_current(self, generation: Optional[int]) -> bool:
        with self._lock:
            return self._running and generation == self._generation

    def start(self) -> int:
        """Cancel any running countdown and start a fresh one."""
        with self._lock:
            self._generation += 1
            self._running = True
            self.remaining = self.duration
            generation = self._generation
        if self.scheduler is not None:
            self.scheduler.start_background_task(self._countdown, generation)
        return generation

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            self._running = False
            self.remaining = self.duration

    def _countdown(self, generation: int) -> None:
        remaining = self.duration
        while remaining > 0:
            self.scheduler.sleep(1)
            remaining -= 1
            with self._lock:
                if generation != self._generation:
                    return
                self.remaining = remaining
        self.on_expire(generation)

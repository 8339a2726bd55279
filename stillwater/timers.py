"""Generation-keyed auto-clear timer."""

import asyncio
import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)

# (delay_seconds, callback) -> handle with a cancel() method
Scheduler = Callable[[float, Callable[[], None]], Any]


def default_scheduler(delay: float, callback: Callable[[], None]) -> Any:
    """Schedule on the running event loop, or on a daemon thread timer."""
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer
    return loop.call_later(delay, callback)


class GenerationTimer:
    """A single pending callback that newer schedules invalidate.

    Every ``schedule`` or ``cancel`` bumps the generation; a callback only
    fires if the generation it was scheduled under is still current.
    """

    def __init__(self, scheduler: Optional[Scheduler] = None):
        self._scheduler = scheduler or default_scheduler
        self._generation = 0
        self._handle: Any = None

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, delay: float, callback: Callable[[], None]) -> int:
        """Arrange for callback to run after delay seconds.

        Any previously scheduled callback is cancelled.

        Returns:
            The generation the callback is bound to.
        """
        self.cancel()
        generation = self._generation

        def _fire() -> None:
            if generation != self._generation:
                logger.debug("Dropping stale timer generation %d", generation)
                return
            self._handle = None
            callback()

        self._handle = self._scheduler(delay, _fire)
        return generation

    def cancel(self) -> None:
        """Invalidate any pending callback."""
        self._generation += 1
        if self._handle is not None:
            cancel = getattr(self._handle, "cancel", None)
            if cancel is not None:
                cancel()
            self._handle = None

"""Fixed-interval periodic task with per-tick error isolation."""

import asyncio
import logging

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Runs an async action every `interval` seconds until stopped.

    Exceptions raised by a tick are logged and the next tick runs on
    schedule, so a failing task never takes the others down with it.
    With `delay_first` the first tick happens after one interval instead
    of immediately.
    """

    def __init__(self, name: str, action, interval: float, delay_first: bool = False):
        self.name = name
        self._action = action
        self._interval = interval
        self._delay_first = delay_first
        self._stop_event = asyncio.Event()
        self.ticks = 0
        self.errors = 0

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    async def run(self) -> None:
        """Tick until stop() is called."""
        logger.info("Starting %s (every %.1fs)", self.name, self._interval)
        if self._delay_first and await self._wait():
            return

        while not self._stop_event.is_set():
            await self.tick()
            if await self._wait():
                break
        logger.info("%s stopped", self.name)

    async def tick(self) -> None:
        """Run the action once, logging instead of raising on failure."""
        self.ticks += 1
        try:
            await self._action()
        except asyncio.CancelledError:
            raise
        except Exception:
            self.errors += 1
            logger.exception("%s tick failed", self.name)

    def stop(self) -> None:
        self._stop_event.set()

    async def _wait(self) -> bool:
        """Sleep one interval. Returns True if stop() was called meanwhile."""
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=self._interval)
        except asyncio.TimeoutError:
            return False
        return True

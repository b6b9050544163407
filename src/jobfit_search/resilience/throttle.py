"""Per-provider minimum delay between outgoing requests."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable

import structlog

logger = structlog.get_logger()


class RequestThrottle:
    """Spaces requests to each provider by a minimum interval.

    Each provider has its own lock, so waiting on one provider never delays
    requests to another.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        """Initialize with no request history."""
        self._clock = clock
        self._last_request: dict[str, float] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, provider: str) -> asyncio.Lock:
        lock = self._locks.get(provider)
        if lock is None:
            lock = self._locks[provider] = asyncio.Lock()
        return lock

    async def wait(self, provider: str, min_interval: float) -> float:
        """Sleep until ``provider`` may be called again and stamp the request.

        Returns the number of seconds slept.
        """
        async with self._lock_for(provider):
            delay = 0.0
            last = self._last_request.get(provider)
            if last is not None:
                delay = min_interval - (self._clock() - last)
            if delay > 0:
                logger.debug("provider_throttled", provider=provider, delay_seconds=round(delay, 3))
                await asyncio.sleep(delay)
            else:
                delay = 0.0
            self._last_request[provider] = self._clock()
            return delay

    def last_request_time(self, provider: str) -> float | None:
        """Clock time of the most recent request to ``provider``."""
        return self._last_request.get(provider)

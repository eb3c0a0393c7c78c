"""
Request throttle.

Serialises awaited provider calls and enforces a minimum interval between
their starts, using a monotonic clock.

Dependencies: asyncio (stdlib)
System role: Rate limiting for batch embedding and vector upserts
"""

import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class RequestThrottle:
    """
    Minimum-interval gate shared by sequential provider calls.

    Usage:
        throttle = RequestThrottle(min_interval_s=0.1)
        async with throttle:
            await provider_call()
    """

    def __init__(self, min_interval_s: float = 0.1) -> None:
        self._min_interval_s = max(0.0, min_interval_s)
        self._lock = asyncio.Lock()
        self._last_call: float | None = None

    @property
    def min_interval_s(self) -> float:
        return self._min_interval_s

    async def acquire(self) -> None:
        """Wait for the lock and for the interval since the previous call."""
        await self._lock.acquire()
        try:
            if self._last_call is not None:
                wait_s = self._min_interval_s - (time.monotonic() - self._last_call)
                if wait_s > 0:
                    logger.debug(f"{__name__}:acquire - Waiting {wait_s:.3f}s")
                    await asyncio.sleep(wait_s)
        except BaseException:
            # Cancelled while waiting: the caller never reaches release()
            self._lock.release()
            raise
        self._last_call = time.monotonic()

    def release(self) -> None:
        self._lock.release()

    async def __aenter__(self) -> "RequestThrottle":
        await self.acquire()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.release()

"""Heartbeat watchdog.

The UI pings the server about once a second while its window is open.
When the pings stop for longer than the timeout, the watchdog fires its
expiry callback so the process can shut itself down.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable

import structlog

logger = structlog.get_logger()


class HeartbeatWatchdog:
    """Liveness tracker driven by explicit heartbeats.

    The silence window starts at construction, so a UI that never connects
    also leads to expiry.
    """

    def __init__(
        self,
        timeout: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize watchdog.

        Args:
            timeout: Seconds of silence tolerated before expiry.
            clock: Monotonic time source, injectable for tests.
        """
        self.timeout = timeout
        self._clock = clock
        self.last_seen = clock()
        self.beats = 0

    def beat(self) -> float:
        """Record a heartbeat.

        Returns:
            The new `last_seen` timestamp.
        """
        self.last_seen = self._clock()
        self.beats += 1
        return self.last_seen

    def seconds_idle(self) -> float:
        """Seconds since the last heartbeat."""
        return self._clock() - self.last_seen

    def expired(self) -> bool:
        """Whether the silence window has been exceeded."""
        return self.seconds_idle() > self.timeout

    async def watch(
        self,
        on_expire: Callable[[], Awaitable[None] | None],
        poll_interval: float = 1.0,
    ) -> None:
        """Poll until expiry, then call `on_expire` once.

        Args:
            on_expire: Callback (sync or async) fired on expiry.
            poll_interval: Seconds between checks.
        """
        while not self.expired():
            await asyncio.sleep(poll_interval)

        logger.info(
            "Heartbeat lost, shutting down",
            idle_seconds=round(self.seconds_idle(), 1),
            timeout=self.timeout,
        )
        result = on_expire()
        if asyncio.iscoroutine(result):
            await result

"""Tests for the heartbeat watchdog."""

import asyncio

import pytest

from infinito_catalog.desktop.watchdog import HeartbeatWatchdog


class FakeClock:
    """Manually advanced clock."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock."""
    return FakeClock()


@pytest.fixture
def watchdog(clock: FakeClock) -> HeartbeatWatchdog:
    """Create a watchdog with a 30 second window."""
    return HeartbeatWatchdog(timeout=30, clock=clock)


class TestHeartbeatWatchdog:
    """Tests for HeartbeatWatchdog."""

    def test_window_starts_at_construction(
        self, watchdog: HeartbeatWatchdog, clock: FakeClock
    ) -> None:
        """Without any beat the watchdog expires after the timeout."""
        clock.now = 30
        assert not watchdog.expired()
        clock.now = 30.5
        assert watchdog.expired()

    def test_beat_resets_window(self, watchdog: HeartbeatWatchdog, clock: FakeClock) -> None:
        """A heartbeat restarts the silence window."""
        clock.now = 25
        assert watchdog.beat() == 25
        clock.now = 50
        assert not watchdog.expired()
        assert watchdog.seconds_idle() == 25
        assert watchdog.beats == 1

    @pytest.mark.asyncio
    async def test_watch_calls_sync_callback(
        self, watchdog: HeartbeatWatchdog, clock: FakeClock
    ) -> None:
        """A plain callback fires once on expiry."""
        calls = []
        clock.now = 31

        await watchdog.watch(lambda: calls.append(True), poll_interval=0)

        assert calls == [True]

    @pytest.mark.asyncio
    async def test_watch_awaits_async_callback(
        self, watchdog: HeartbeatWatchdog, clock: FakeClock
    ) -> None:
        """A coroutine callback is awaited."""
        calls = []

        async def on_expire() -> None:
            calls.append(True)

        clock.now = 31
        await watchdog.watch(on_expire, poll_interval=0)

        assert calls == [True]

    @pytest.mark.asyncio
    async def test_watch_waits_while_beating(
        self, watchdog: HeartbeatWatchdog, clock: FakeClock
    ) -> None:
        """The watch keeps polling while heartbeats arrive."""
        fired = asyncio.Event()
        task = asyncio.create_task(watchdog.watch(fired.set, poll_interval=0.01))

        for second in range(10, 100, 10):
            clock.now = second
            watchdog.beat()
            await asyncio.sleep(0.02)
            assert not fired.is_set()

        clock.now += 31
        await asyncio.wait_for(task, timeout=1)
        assert fired.is_set()

"""Unit tests for the background session sweeper."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from sms_relay.adapters.outbound.session_store import InMemorySessionStore
from sms_relay.infrastructure.scheduling.session_sweeper import (
    SessionSweeper,
    run_session_sweeper,
)


class CountingStore(InMemorySessionStore):
    """Session store that counts sweeps and can fail on demand."""

    def __init__(self, fail_first: bool = False) -> None:
        super().__init__(ttl_seconds=86400)
        self.sweeps = 0
        self._fail_first = fail_first

    async def sweep_expired(self, now=None, ttl=None) -> int:
        self.sweeps += 1
        if self._fail_first and self.sweeps == 1:
            raise RuntimeError("sweep failed")
        return await super().sweep_expired(now, ttl)


@pytest.mark.asyncio
async def test_sweeper_runs_periodically():
    """Test that the sweeper calls sweep_expired on its interval."""
    store = CountingStore()
    sweeper = SessionSweeper(store, interval_seconds=0.01)

    sweeper.start()
    assert sweeper.running is True
    await asyncio.sleep(0.1)
    await sweeper.stop()

    assert store.sweeps >= 2
    assert sweeper.running is False


@pytest.mark.asyncio
async def test_sweeper_removes_expired_sessions():
    """Test that expired sessions disappear while the sweeper runs."""
    stale = datetime.now(timezone.utc) - timedelta(hours=25)
    store = InMemorySessionStore(ttl_seconds=86400, clock=lambda: stale)
    await store.get_or_create("+15550001111")
    store._clock = lambda: datetime.now(timezone.utc)

    sweeper = SessionSweeper(store, interval_seconds=0.01)
    sweeper.start()
    await asyncio.sleep(0.05)
    await sweeper.stop()

    assert await store.get("+15550001111") is None


@pytest.mark.asyncio
async def test_sweeper_survives_sweep_errors():
    """Test that one failing sweep does not stop the loop."""
    store = CountingStore(fail_first=True)
    sweeper = SessionSweeper(store, interval_seconds=0.01)

    sweeper.start()
    await asyncio.sleep(0.1)

    assert sweeper.running is True
    await sweeper.stop()
    assert store.sweeps >= 2


@pytest.mark.asyncio
async def test_start_is_idempotent_and_stop_without_start():
    """Test start twice keeps one task and stop before start is a no-op."""
    sweeper = SessionSweeper(CountingStore(), interval_seconds=10)
    await sweeper.stop()

    sweeper.start()
    task = sweeper._task
    sweeper.start()

    assert sweeper._task is task
    await sweeper.stop()


@pytest.mark.asyncio
async def test_run_session_sweeper_propagates_cancellation():
    """Test that the loop re-raises CancelledError."""
    task = asyncio.create_task(run_session_sweeper(CountingStore(), interval_seconds=10))
    await asyncio.sleep(0)
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

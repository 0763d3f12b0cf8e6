"""Periodic session expiry sweep."""

import asyncio
from typing import Optional

from sms_relay.application.ports.session_store import SessionStore
from sms_relay.infrastructure.logging.logger import logger


async def run_session_sweeper(session_store: SessionStore, interval_seconds: float) -> None:
    """
    Sweep expired sessions every interval until cancelled.

    Args:
        session_store: Store to sweep
        interval_seconds: Delay between sweeps
    """
    try:
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                removed = await session_store.sweep_expired()
            except Exception as e:
                logger.error("Session sweep failed: %s", e)
                continue
            if removed:
                logger.info("Session sweep removed %d expired session(s)", removed)
    except asyncio.CancelledError:
        logger.info("Session sweeper stopped")
        raise


class SessionSweeper:
    """Owns the background sweep task for the application lifespan."""

    def __init__(self, session_store: SessionStore, interval_seconds: float) -> None:
        self._session_store = session_store
        self._interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the sweep task if it is not already running."""
        if self.running:
            return
        self._task = asyncio.create_task(
            run_session_sweeper(self._session_store, self._interval_seconds)
        )

    async def stop(self) -> None:
        """Cancel the sweep task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

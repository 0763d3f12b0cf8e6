"""Conversation session entity."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


@dataclass
class Session:
    """Session entity mapping a sender phone number to an assistant thread."""

    conversation_id: str
    thread_handle: Optional[str] = None  # Assigned lazily, never replaced
    created_at: datetime = field(default_factory=utc_now)
    last_updated: datetime = field(default_factory=utc_now)

    def touch(self, now: datetime) -> None:
        """Refresh the last_updated timestamp."""
        self.last_updated = now

    def assign_thread_handle(self, thread_handle: str) -> str:
        """
        Assign the assistant thread handle if none is set yet.

        Args:
            thread_handle: Handle returned by the assistant backend

        Returns:
            The handle the session ends up with (the existing one if already assigned)
        """
        if self.thread_handle is None:
            self.thread_handle = thread_handle
        return self.thread_handle

    def is_expired(self, now: datetime, ttl: timedelta) -> bool:
        """
        Check whether the session is older than the TTL.

        Args:
            now: Reference time
            ttl: Maximum idle time

        Returns:
            True if last_updated precedes now - ttl
        """
        return self.last_updated < now - ttl

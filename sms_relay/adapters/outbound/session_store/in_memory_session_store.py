"""In-memory session store adapter."""

import asyncio
from datetime import datetime, timedelta
from typing import Callable, Optional

from sms_relay.application.ports.session_store import SessionStore
from sms_relay.domain.entities.session import Session, utc_now
from sms_relay.infrastructure.config.settings import settings


class InMemorySessionStore(SessionStore):
    """In-memory implementation of the session store with TTL sweep."""

    def __init__(
        self,
        ttl_seconds: Optional[int] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize in-memory store.

        Args:
            ttl_seconds: Idle time in seconds before a session expires
                (defaults to settings.session_ttl_seconds)
            clock: Callable returning the current aware datetime
        """
        self._storage: dict[str, Session] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._ttl = timedelta(seconds=ttl_seconds or settings.session_ttl_seconds)
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        """Configured session TTL."""
        return self._ttl

    def __len__(self) -> int:
        return len(self._storage)

    async def get_or_create(self, conversation_id: str) -> Session:
        """
        Get the session for a conversation, creating it if absent.

        Args:
            conversation_id: Conversation identifier

        Returns:
            Session entity
        """
        now = self._clock()
        session = self._storage.get(conversation_id)
        if session is None:
            session = Session(
                conversation_id=conversation_id,
                created_at=now,
                last_updated=now,
            )
            self._storage[conversation_id] = session
        else:
            session.touch(now)
        return session

    async def get(self, conversation_id: str) -> Optional[Session]:
        """
        Get the session for a conversation without touching it.

        Args:
            conversation_id: Conversation identifier

        Returns:
            Session entity, or None if not found
        """
        return self._storage.get(conversation_id)

    async def assign_thread_handle(self, conversation_id: str, thread_handle: str) -> str:
        """
        Assign a thread handle to a session unless it already has one.

        A session removed by the sweep while the handle was being created is
        recreated, so the handle is not lost.

        Args:
            conversation_id: Conversation identifier
            thread_handle: Handle created by the assistant backend

        Returns:
            The effective thread handle of the session
        """
        session = self._storage.get(conversation_id)
        if session is None:
            session = await self.get_or_create(conversation_id)
        return session.assign_thread_handle(thread_handle)

    def lock(self, conversation_id: str) -> asyncio.Lock:
        """
        Get the lock guarding thread creation for a conversation.

        Args:
            conversation_id: Conversation identifier

        Returns:
            Lock shared by all callers for the conversation
        """
        lock = self._locks.get(conversation_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[conversation_id] = lock
        return lock

    async def sweep_expired(
        self,
        now: Optional[datetime] = None,
        ttl: Optional[timedelta] = None,
    ) -> int:
        """
        Remove sessions idle for longer than the TTL.

        Args:
            now: Reference time (defaults to the store clock)
            ttl: Maximum idle time (defaults to the configured TTL)

        Returns:
            Number of sessions removed
        """
        now = now or self._clock()
        ttl = ttl or self._ttl
        expired_sessions = [
            conversation_id
            for conversation_id, session in self._storage.items()
            if session.is_expired(now, ttl)
        ]
        for conversation_id in expired_sessions:
            del self._storage[conversation_id]
        self._drop_idle_locks()
        return len(expired_sessions)

    async def delete(self, conversation_id: str) -> None:
        """
        Delete the session for a conversation.

        Args:
            conversation_id: Conversation identifier
        """
        self._storage.pop(conversation_id, None)
        lock = self._locks.get(conversation_id)
        if lock is not None and not lock.locked():
            del self._locks[conversation_id]

    def _drop_idle_locks(self) -> None:
        # Locks held during a sweep or delete are collected on a later sweep
        orphaned = [
            conversation_id
            for conversation_id, lock in self._locks.items()
            if conversation_id not in self._storage and not lock.locked()
        ]
        for conversation_id in orphaned:
            del self._locks[conversation_id]

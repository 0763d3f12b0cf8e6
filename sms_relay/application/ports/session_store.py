"""Session store port."""

import asyncio
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Optional

from sms_relay.domain.entities.session import Session


class SessionStore(ABC):
    """Port interface for the conversation session store."""

    @abstractmethod
    async def get_or_create(self, conversation_id: str) -> Session:
        """
        Get the session for a conversation, creating it if absent.

        Existing sessions have their last_updated timestamp refreshed.

        Args:
            conversation_id: Conversation identifier (sender phone number)

        Returns:
            Session entity
        """
        pass

    @abstractmethod
    async def get(self, conversation_id: str) -> Optional[Session]:
        """
        Get the session for a conversation without touching it.

        Args:
            conversation_id: Conversation identifier

        Returns:
            Session entity, or None if not found
        """
        pass

    @abstractmethod
    async def assign_thread_handle(self, conversation_id: str, thread_handle: str) -> str:
        """
        Assign a thread handle to a session unless it already has one.

        Args:
            conversation_id: Conversation identifier
            thread_handle: Handle created by the assistant backend

        Returns:
            The effective thread handle of the session
        """
        pass

    @abstractmethod
    def lock(self, conversation_id: str) -> asyncio.Lock:
        """
        Get the critical section guarding thread creation for a conversation.

        Args:
            conversation_id: Conversation identifier

        Returns:
            Lock shared by every caller using the same conversation identifier
        """
        pass

    @abstractmethod
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
        pass

    @abstractmethod
    async def delete(self, conversation_id: str) -> None:
        """
        Delete the session for a conversation.

        Args:
            conversation_id: Conversation identifier
        """
        pass

"""Messaging client port."""

from abc import ABC, abstractmethod
from typing import Optional


class MessagingClient(ABC):
    """Port interface for outbound SMS delivery."""

    @abstractmethod
    async def send(self, body: str, to: str, from_: Optional[str] = None) -> str:
        """
        Send an SMS.

        Args:
            body: Message text
            to: Destination phone number
            from_: Sender phone number (defaults to the configured sender)

        Returns:
            Provider message identifier

        Raises:
            DeliveryError: If the provider rejects the message
        """
        pass

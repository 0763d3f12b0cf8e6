"""Twilio messaging client adapter."""

import asyncio
from typing import Optional

from twilio.base.exceptions import TwilioRestException
from twilio.rest import Client

from sms_relay.application.ports.messaging_client import MessagingClient
from sms_relay.domain.errors import DeliveryError
from sms_relay.infrastructure.config.settings import settings
from sms_relay.infrastructure.logging.logger import logger


class TwilioMessagingClient(MessagingClient):
    """Twilio SMS client implementation using the official SDK."""

    def __init__(
        self,
        account_sid: Optional[str] = None,
        auth_token: Optional[str] = None,
        from_number: Optional[str] = None,
    ) -> None:
        """
        Initialize Twilio messaging client.

        Args:
            account_sid: Twilio account SID (defaults to settings.twilio_account_sid)
            auth_token: Twilio auth token (defaults to settings.twilio_auth_token)
            from_number: Sender number (defaults to settings.twilio_phone_number)
        """
        self._account_sid = account_sid or settings.twilio_account_sid
        self._auth_token = auth_token or settings.twilio_auth_token
        self._from_number = from_number or settings.twilio_phone_number

        if not self._account_sid or not self._auth_token:
            raise ValueError("Twilio account SID and auth token are required")

        self._client = Client(self._account_sid, self._auth_token)

    def _create_message(self, body: str, from_: str, to: str) -> str:
        message = self._client.messages.create(body=body, from_=from_, to=to)
        return message.sid

    async def send(self, body: str, to: str, from_: Optional[str] = None) -> str:
        """
        Send an SMS through Twilio.

        The SDK is blocking, so the request runs in a worker thread.

        Args:
            body: Message text
            to: Destination phone number
            from_: Sender phone number (defaults to the configured sender)

        Returns:
            Twilio message SID

        Raises:
            DeliveryError: If Twilio rejects the message
        """
        sender = from_ or self._from_number
        try:
            sid = await asyncio.to_thread(self._create_message, body, sender, to)
        except TwilioRestException as e:
            logger.error("Twilio rejected message to %s: %s", to, e.msg)
            raise DeliveryError(f"Twilio send failed: {e.msg}", to=to) from e

        logger.info("Message sent to %s: %s", to, sid)
        return sid

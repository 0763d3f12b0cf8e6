"""Qualified lead notification use case."""

from sms_relay.application.dtos.lead import LeadRecord
from sms_relay.application.ports.messaging_client import MessagingClient
from sms_relay.infrastructure.logging.logger import logger

LEAD_MESSAGE_TEMPLATE = (
    "New Qualified Lead:\n"
    "Full Name: {full_name}\n"
    "Phone: {phone}\n"
    "City: {city}\n"
    "Summary of Legal Concern: {legal_concern}"
)


def format_lead_message(lead: LeadRecord) -> str:
    """
    Render the operator notification for a lead.

    Field values are interpolated verbatim.

    Args:
        lead: Lead record

    Returns:
        Notification text
    """
    return LEAD_MESSAGE_TEMPLATE.format(
        full_name=lead.full_name,
        phone=lead.phone,
        city=lead.city,
        legal_concern=lead.legal_concern,
    )


class NotifyQualifiedLead:
    """Send a qualified lead to the operator by SMS."""

    def __init__(self, messaging_client: MessagingClient, operator_phone: str) -> None:
        """
        Initialize lead notifier.

        Args:
            messaging_client: Outbound SMS port
            operator_phone: Number that receives lead notifications
        """
        self._messaging_client = messaging_client
        self._operator_phone = operator_phone

    async def notify(self, lead: LeadRecord) -> str:
        """
        Send the lead notification.

        Args:
            lead: Lead record

        Returns:
            Provider message identifier

        Raises:
            DeliveryError: If the messaging provider rejects the send
        """
        message_id = await self._messaging_client.send(
            format_lead_message(lead),
            to=self._operator_phone,
        )
        logger.info("Lead notification sent: %s", message_id)
        return message_id

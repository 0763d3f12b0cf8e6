"""Unit tests for NotifyQualifiedLead."""

import pytest

from sms_relay.application.dtos.lead import LeadRecord
from sms_relay.application.use_cases.notify_qualified_lead import (
    NotifyQualifiedLead,
    format_lead_message,
)
from sms_relay.domain.errors import DeliveryError

OPERATOR_PHONE = "+17478375004"


@pytest.fixture
def lead():
    """Create a lead record using the assistant's camelCase keys."""
    return LeadRecord.model_validate(
        {
            "fullName": "Jane Doe",
            "phone": "+15550002222",
            "city": "Los Angeles",
            "legalConcern": "Rear-ended on the 405",
        }
    )


def test_format_lead_message_uses_four_line_template(lead):
    """Test the exact notification text."""
    assert format_lead_message(lead) == (
        "New Qualified Lead:\n"
        "Full Name: Jane Doe\n"
        "Phone: +15550002222\n"
        "City: Los Angeles\n"
        "Summary of Legal Concern: Rear-ended on the 405"
    )


def test_format_lead_message_passes_values_through_verbatim():
    """Test that field values are not escaped or trimmed."""
    lead = LeadRecord(full_name="  <b>Jo & Co</b> ", phone="n/a", city="", legal_concern="a\nb")

    message = format_lead_message(lead)

    assert "Full Name:   <b>Jo & Co</b> \n" in message
    assert "City: \n" in message
    assert message.endswith("Summary of Legal Concern: a\nb")


@pytest.mark.asyncio
async def test_notify_sends_to_operator(lead, messaging_client):
    """Test that notify texts the operator number and returns the message id."""
    notifier = NotifyQualifiedLead(messaging_client, OPERATOR_PHONE)

    message_id = await notifier.notify(lead)

    assert message_id == "SM1"
    assert messaging_client.sent_to(OPERATOR_PHONE) == [format_lead_message(lead)]


@pytest.mark.asyncio
async def test_notify_raises_delivery_error(lead, messaging_client):
    """Test that a rejected send surfaces as DeliveryError."""
    messaging_client.fail_for.add(OPERATOR_PHONE)
    notifier = NotifyQualifiedLead(messaging_client, OPERATOR_PHONE)

    with pytest.raises(DeliveryError):
        await notifier.notify(lead)

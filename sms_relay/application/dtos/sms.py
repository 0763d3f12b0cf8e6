"""Inbound SMS DTOs."""

from typing import Optional

from sms_relay.application.dtos.base import DTO


class InboundSms(DTO):
    """Inbound message extracted from a webhook payload."""

    message: str
    phone_number: str
    source_format: str = "twilio"  # twilio or custom


class ReplyOutcome(DTO):
    """Outcome of relaying one inbound message."""

    success: bool
    message: str
    message_id: Optional[str] = None
    run_status: Optional[str] = None

    class Config:
        """Pydantic configuration."""

        json_schema_extra = {
            "example": {
                "success": True,
                "message": "Thanks for reaching out! What city are you located in?",
                "message_id": "SM0123456789abcdef0123456789abcdef",
                "run_status": "completed",
            }
        }

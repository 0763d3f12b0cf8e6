"""HTTP adapter schemas for external integrations."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class InboundSmsResponse(BaseModel):
    """Response for a relayed inbound SMS."""

    success: bool
    message: str
    messageId: Optional[str] = None  # Outbound Twilio message SID

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "message": "Thanks for reaching out! What city are you located in?",
                "messageId": "SM0123456789abcdef0123456789abcdef",
            }
        }
    )


class CurrentTimeResponse(BaseModel):
    """Current New York time in a human readable form."""

    current_time: str

    model_config = ConfigDict(
        json_schema_extra={"example": {"current_time": "5th March 2024 3:07 PM EST"}}
    )


class WebhookTestResponse(BaseModel):
    """Acknowledgement for the test webhook."""

    success: bool = True
    message: str = "Webhook received"

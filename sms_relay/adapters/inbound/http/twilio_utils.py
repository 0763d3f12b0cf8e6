"""Twilio utility functions for webhook handling."""

from typing import Any, Optional

from fastapi import HTTPException, Request, status
from twilio.request_validator import RequestValidator

from sms_relay.application.dtos.sms import InboundSms
from sms_relay.infrastructure.config.settings import settings


def validate_twilio_signature(request: Request, form_data: dict[str, str]) -> bool:
    """
    Validate Twilio webhook signature.

    Args:
        request: FastAPI request object
        form_data: Form data dictionary from the request

    Returns:
        True if signature is valid (or validation is disabled), False otherwise

    Raises:
        HTTPException: 500 if validation is enabled without an auth token,
            403 if the signature header is missing
    """
    if not settings.twilio_validate_signature:
        return True

    if not settings.twilio_auth_token:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Twilio signature validation enabled but TWILIO_AUTH_TOKEN not configured",
        )

    signature = request.headers.get("X-Twilio-Signature")
    if not signature:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Missing X-Twilio-Signature header",
        )

    validator = RequestValidator(settings.twilio_auth_token)
    return validator.validate(str(request.url), form_data, signature)


def extract_inbound_sms(payload: dict[str, Any]) -> Optional[InboundSms]:
    """
    Extract message and sender from a webhook payload.

    Two shapes are accepted, checked in order:
    ``{"customData": {"message": ...}, "phone": ...}`` and Twilio's
    ``{"Body": ..., "From": ...}``.

    Args:
        payload: Parsed request body

    Returns:
        InboundSms, or None if neither shape matches
    """
    custom_data = payload.get("customData")
    if isinstance(custom_data, dict) and custom_data.get("message"):
        return InboundSms(
            message=str(custom_data["message"]),
            phone_number=str(payload.get("phone") or ""),
            source_format="custom",
        )

    if payload.get("Body") and payload.get("From"):
        return InboundSms(
            message=str(payload["Body"]),
            phone_number=str(payload["From"]),
            source_format="twilio",
        )

    return None

"""HTTP routes."""

from typing import Any
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from sms_relay.adapters.inbound.http.schemas import (
    CurrentTimeResponse,
    InboundSmsResponse,
    WebhookTestResponse,
)
from sms_relay.adapters.inbound.http.twilio_utils import (
    extract_inbound_sms,
    validate_twilio_signature,
)
from sms_relay.application.ports.session_store import SessionStore
from sms_relay.application.use_cases.format_current_time import format_current_time
from sms_relay.application.use_cases.handle_inbound_message_use_case import (
    HandleInboundMessageUseCase,
)
from sms_relay.infrastructure.config.settings import settings
from sms_relay.infrastructure.logging.logger import log_turn, logger
from sms_relay.infrastructure.wiring.dependencies import (
    get_handle_inbound_message_use_case,
    get_session_store,
)

router = APIRouter()

MISSING_FIELDS_ERROR = "Message and phone number are required"


async def _read_payload(request: Request) -> tuple[dict[str, Any], bool]:
    """
    Parse a JSON or form-encoded request body.

    Returns:
        Tuple of (payload dict, whether the body was form-encoded)

    Raises:
        HTTPException: 400 if a JSON body cannot be decoded
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError as err:
            # JSONDecodeError and UnicodeDecodeError
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Request body is not valid JSON",
            ) from err
        return (body if isinstance(body, dict) else {}), False

    form = await request.form()
    return {key: value for key, value in form.items()}, True


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


@router.post("/lionhead-sms", response_model=InboundSmsResponse)
async def inbound_sms(
    request: Request,
    use_case: HandleInboundMessageUseCase = Depends(get_handle_inbound_message_use_case),
):
    """
    Relay an inbound SMS to the assistant and text back its reply.

    Accepts ``{customData: {message}, phone}`` or Twilio's ``{Body, From}``,
    either as JSON or form-encoded.

    Args:
        request: FastAPI request object
        use_case: Inbound message use case

    Returns:
        Reply text and outbound message id, or an error payload
    """
    payload, is_form = await _read_payload(request)
    logger.info("Received message data: %s", payload)

    if is_form and not validate_twilio_signature(request, payload):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid Twilio signature",
        )

    inbound = extract_inbound_sms(payload)
    if inbound is None:
        logger.error("Unrecognized message format: %s", payload)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": MISSING_FIELDS_ERROR, "receivedFormat": list(payload.keys())},
        )

    if not inbound.message or not inbound.phone_number:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": MISSING_FIELDS_ERROR},
        )

    # Generate turn_id for request correlation
    turn_id = str(uuid4())

    log_turn(
        conversation_id=inbound.phone_number,
        turn_id=turn_id,
        component="http",
        message_length=len(inbound.message),
        source_format=inbound.source_format,
    )

    try:
        outcome = await use_case.execute(inbound.phone_number, inbound.message, turn_id=turn_id)
    except Exception as e:
        logger.exception("Error processing message from %s", inbound.phone_number)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": str(e)},
        )

    log_turn(
        conversation_id=inbound.phone_number,
        turn_id=turn_id,
        component="http",
        run_status=outcome.run_status,
        reply_length=len(outcome.message),
    )

    return InboundSmsResponse(
        success=outcome.success,
        message=outcome.message,
        messageId=outcome.message_id,
    )


@router.post("/api/current-time", response_model=CurrentTimeResponse)
async def current_time() -> CurrentTimeResponse:
    """
    Current New York time, e.g. '5th March 2024 3:07 PM EST'.

    Returns:
        Formatted current time
    """
    return CurrentTimeResponse(current_time=format_current_time())


@router.post("/webhook-test", response_model=WebhookTestResponse)
async def webhook_test(request: Request) -> WebhookTestResponse:
    """
    Acknowledge any payload without side effects.

    Returns:
        Fixed acknowledgement
    """
    try:
        payload, _ = await _read_payload(request)
    except HTTPException:
        payload = {}
    logger.info("Webhook received: %s", payload)
    return WebhookTestResponse()


@router.get("/debug/session/{conversation_id}", status_code=status.HTTP_200_OK)
async def get_session_debug(
    conversation_id: str,
    session_store: SessionStore = Depends(get_session_store),
) -> dict:
    """
    Get debug information for a session (only enabled if DEBUG_MODE=true).

    Args:
        conversation_id: Conversation identifier (sender phone number)
        session_store: Session store

    Returns:
        Session debug information

    Raises:
        HTTPException: 404 if DEBUG_MODE is disabled
    """
    if not settings.debug_mode:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Debug endpoint is disabled",
        )

    session = await session_store.get(conversation_id)

    if session is None:
        return {"conversation_id": conversation_id, "session": None}

    return {
        "conversation_id": conversation_id,
        "session": {
            "thread_handle": session.thread_handle,
            "created_at": session.created_at.isoformat(),
            "last_updated": session.last_updated.isoformat(),
        },
    }


@router.post("/debug/session/{conversation_id}/reset", status_code=status.HTTP_200_OK)
async def reset_session(
    conversation_id: str,
    session_store: SessionStore = Depends(get_session_store),
) -> dict:
    """
    Reset a session (only enabled if DEBUG_MODE=true).

    The next message from the sender starts a new assistant thread.

    Args:
        conversation_id: Conversation identifier
        session_store: Session store

    Returns:
        Confirmation message

    Raises:
        HTTPException: 404 if DEBUG_MODE is disabled
    """
    if not settings.debug_mode:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Debug endpoint is disabled",
        )

    await session_store.delete(conversation_id)

    return {
        "conversation_id": conversation_id,
        "message": "Session reset successfully",
        "status": "reset",
    }

"""Dependency injection factory functions."""

from functools import lru_cache

from sms_relay.adapters.outbound.assistant.openai_assistant_backend import (
    OpenAIAssistantBackend,
)
from sms_relay.adapters.outbound.messaging.twilio_messaging_client import (
    TwilioMessagingClient,
)
from sms_relay.adapters.outbound.session_store import InMemorySessionStore
from sms_relay.application.ports.assistant_backend import AssistantBackend
from sms_relay.application.ports.messaging_client import MessagingClient
from sms_relay.application.ports.session_store import SessionStore
from sms_relay.application.use_cases.dispatch_tool_call import DispatchToolCall
from sms_relay.application.use_cases.handle_inbound_message_use_case import (
    HandleInboundMessageUseCase,
)
from sms_relay.application.use_cases.notify_qualified_lead import NotifyQualifiedLead
from sms_relay.infrastructure.config.settings import settings
from sms_relay.infrastructure.logging.logger import log_turn


def create_session_store() -> SessionStore:
    """
    Factory function to create the session store.

    Returns:
        SessionStore instance
    """
    return InMemorySessionStore(ttl_seconds=settings.session_ttl_seconds)


def create_messaging_client() -> MessagingClient:
    """
    Factory function to create the messaging client.

    Returns:
        MessagingClient instance
    """
    return TwilioMessagingClient()


def create_assistant_backend() -> AssistantBackend:
    """
    Factory function to create the assistant backend.

    Returns:
        AssistantBackend instance
    """
    return OpenAIAssistantBackend()


def create_tool_dispatcher(messaging_client: MessagingClient) -> DispatchToolCall:
    """
    Factory function to create the tool dispatcher.

    Args:
        messaging_client: Client used for lead notifications

    Returns:
        DispatchToolCall instance
    """
    lead_notifier = NotifyQualifiedLead(messaging_client, settings.lead_notification_phone)
    return DispatchToolCall(lead_notifier)


def create_handle_inbound_message_use_case(
    session_store: SessionStore,
) -> HandleInboundMessageUseCase:
    """
    Factory function to create HandleInboundMessageUseCase with dependencies.

    Args:
        session_store: Shared session store

    Returns:
        HandleInboundMessageUseCase instance
    """
    messaging_client = create_messaging_client()
    assistant_backend = create_assistant_backend()
    tool_dispatcher = create_tool_dispatcher(messaging_client)

    # Wire logger function
    def _logger_func(conversation_id, turn_id, component, **kwargs):
        log_turn(conversation_id, turn_id, component, **kwargs)

    return HandleInboundMessageUseCase(
        session_store,
        assistant_backend,
        messaging_client,
        tool_dispatcher,
        assistant_id=settings.openai_assistant_id,
        poll_interval_seconds=settings.run_poll_interval_seconds,
        max_polls=settings.run_max_polls,
        logger=_logger_func,
    )


@lru_cache
def get_session_store() -> SessionStore:
    """FastAPI dependency: process-wide session store."""
    return create_session_store()


@lru_cache
def get_handle_inbound_message_use_case() -> HandleInboundMessageUseCase:
    """FastAPI dependency: process-wide inbound message use case."""
    return create_handle_inbound_message_use_case(get_session_store())

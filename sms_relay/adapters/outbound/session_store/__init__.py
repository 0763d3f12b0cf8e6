"""Session store outbound adapter."""

from sms_relay.adapters.outbound.session_store.in_memory_session_store import (
    InMemorySessionStore,
)

__all__ = [
    "InMemorySessionStore",
]

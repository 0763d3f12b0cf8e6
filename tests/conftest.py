"""Shared fixtures."""

import pytest

from sms_relay.adapters.outbound.session_store import InMemorySessionStore
from tests.fakes import FakeAssistantBackend, FakeMessagingClient


@pytest.fixture
def messaging_client() -> FakeMessagingClient:
    """Create fake messaging client."""
    return FakeMessagingClient()


@pytest.fixture
def assistant_backend() -> FakeAssistantBackend:
    """Create fake assistant backend."""
    return FakeAssistantBackend()


@pytest.fixture
def session_store() -> InMemorySessionStore:
    """Create in-memory session store with a 24 hour TTL."""
    return InMemorySessionStore(ttl_seconds=86400)

"""Unit tests for the Session entity."""

from datetime import datetime, timedelta, timezone

from sms_relay.domain.entities.session import Session

T0 = datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc)


def test_new_session_has_no_thread_handle_and_aware_timestamps():
    """Test that a new session starts without a thread and with UTC timestamps."""
    session = Session(conversation_id="+15550001111")

    assert session.thread_handle is None
    assert session.created_at.tzinfo == timezone.utc
    assert session.last_updated.tzinfo == timezone.utc


def test_touch_updates_last_updated_only():
    """Test that touch() moves last_updated and leaves created_at alone."""
    session = Session(conversation_id="+15550001111", created_at=T0, last_updated=T0)

    session.touch(T0 + timedelta(minutes=5))

    assert session.created_at == T0
    assert session.last_updated == T0 + timedelta(minutes=5)


def test_assign_thread_handle_is_write_once():
    """Test that an assigned thread handle is never replaced."""
    session = Session(conversation_id="+15550001111")

    assert session.assign_thread_handle("thread_a") == "thread_a"
    assert session.assign_thread_handle("thread_b") == "thread_a"
    assert session.thread_handle == "thread_a"


def test_is_expired_uses_strict_boundary():
    """Test expiry is strictly older than the TTL."""
    ttl = timedelta(hours=24)
    session = Session(conversation_id="+15550001111", created_at=T0, last_updated=T0)

    assert session.is_expired(T0 + ttl + timedelta(milliseconds=1), ttl) is True
    assert session.is_expired(T0 + ttl, ttl) is False
    assert session.is_expired(T0 + ttl - timedelta(milliseconds=1), ttl) is False

"""Relay logger and the per-turn structured log helper."""

import logging
from typing import Any

_logger = logging.getLogger("sms_relay")
_logger.setLevel(logging.INFO)

# Attach a single stderr handler, even if imported more than once
if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def log_turn(
    conversation_id: str,
    turn_id: str,
    component: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Emit one line describing a step of an SMS relay turn.

    The line carries the sender, the turn id and the emitting component
    first, then any event fields, as ``key='value'`` pairs.

    Args:
        conversation_id: Sender phone number keying the session
        turn_id: Id shared by all lines of one inbound message
        component: Emitter ('http', 'driver' or 'tools')
        level: Logging level for the line
        **kwargs: Event fields such as event, run_id or run_status
    """
    fields = {
        "conversation_id": conversation_id,
        "turn_id": turn_id,
        "component": component,
    }
    fields.update(kwargs)

    _logger.log(level, " | ".join(f"{k}={v!r}" for k, v in fields.items()))


logger = _logger

"""Assistant run DTOs."""

from typing import Optional

from sms_relay.application.dtos.base import DTO

ACTIVE_RUN_STATUSES = frozenset({"queued", "running", "in_progress"})
REQUIRES_ACTION = "requires_action"
COMPLETED = "completed"
TIMED_OUT = "timed_out"  # Local status, set when the poll bound is exceeded


class ToolCall(DTO):
    """Function call requested by the assistant."""

    id: str
    function_name: str
    arguments: str = "{}"  # Raw JSON as issued by the backend


class ToolOutput(DTO):
    """Result of a tool call, fed back to the assistant."""

    tool_call_id: str
    output: str
    ok: bool = True
    error: Optional[str] = None  # Diagnostics only, never sent to the backend


class RunStatus(DTO):
    """Snapshot of an assistant run."""

    run_id: str
    status: str
    required_tool_calls: list[ToolCall] = []
    last_error: Optional[str] = None

    @property
    def is_active(self) -> bool:
        """Whether the run is still queued or executing."""
        return self.status in ACTIVE_RUN_STATUSES


class ThreadMessage(DTO):
    """Message stored on an assistant thread."""

    role: str
    content: str = ""

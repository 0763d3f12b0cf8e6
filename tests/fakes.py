"""Test doubles for the relay ports."""

import asyncio
from typing import Optional, Union

from sms_relay.application.dtos.run import RunStatus, ThreadMessage, ToolCall, ToolOutput
from sms_relay.application.ports.assistant_backend import AssistantBackend
from sms_relay.application.ports.messaging_client import MessagingClient
from sms_relay.domain.errors import DeliveryError


class FakeMessagingClient(MessagingClient):
    """Messaging client that records sends instead of delivering them."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Optional[str]]] = []
        self.fail_for: set[str] = set()
        self.error: Optional[Exception] = None

    async def send(self, body: str, to: str, from_: Optional[str] = None) -> str:
        """Record the message and return a fake SID."""
        if self.error is not None:
            raise self.error
        if to in self.fail_for:
            raise DeliveryError(f"Invalid 'To' Phone Number: {to}", to=to)
        self.sent.append({"body": body, "to": to, "from_": from_})
        return f"SM{len(self.sent)}"

    def sent_to(self, to: str) -> list[str]:
        """Bodies sent to a given number."""
        return [message["body"] for message in self.sent if message["to"] == to]


class FakeAssistantBackend(AssistantBackend):
    """Scripted assistant backend.

    Run statuses are returned in order; the last one repeats forever.
    """

    def __init__(self) -> None:
        self.statuses: list[RunStatus] = [RunStatus(run_id="run_1", status="completed")]
        self.messages: list[ThreadMessage] = [ThreadMessage(role="assistant", content="Hi there")]
        self.threads_created = 0
        self.create_thread_delay = 0.0
        self.posted: list[tuple[str, str, str]] = []
        self.runs_started: list[tuple[str, str]] = []
        self.submitted: list[tuple[str, str, list[ToolOutput]]] = []
        self.status_checks = 0
        self.post_error: Optional[Exception] = None
        self.cancelled: list[tuple[str, str]] = []
        self.cancel_error: Optional[Exception] = None

    def script(self, *items: Union[str, RunStatus]) -> None:
        """Set the run status sequence (plain strings become simple statuses)."""
        self.statuses = [
            item if isinstance(item, RunStatus) else RunStatus(run_id="run_1", status=item)
            for item in items
        ]

    def reply_with(self, *messages: tuple[str, str]) -> None:
        """Set thread messages, latest first, as (role, content) pairs."""
        self.messages = [ThreadMessage(role=role, content=content) for role, content in messages]

    async def create_thread(self) -> str:
        self.threads_created += 1
        thread_handle = f"thread_{self.threads_created}"
        if self.create_thread_delay:
            await asyncio.sleep(self.create_thread_delay)
        return thread_handle

    async def post_message(self, thread_handle: str, role: str, content: str) -> None:
        if self.post_error is not None:
            raise self.post_error
        self.posted.append((thread_handle, role, content))

    async def start_run(self, thread_handle: str, assistant_id: str) -> str:
        self.runs_started.append((thread_handle, assistant_id))
        return "run_1"

    async def get_run_status(self, thread_handle: str, run_handle: str) -> RunStatus:
        self.status_checks += 1
        if len(self.statuses) > 1:
            return self.statuses.pop(0)
        return self.statuses[0]

    async def submit_tool_outputs(
        self,
        thread_handle: str,
        run_handle: str,
        outputs: list[ToolOutput],
    ) -> None:
        self.submitted.append((thread_handle, run_handle, outputs))

    async def cancel_run(self, thread_handle: str, run_handle: str) -> None:
        if self.cancel_error is not None:
            raise self.cancel_error
        self.cancelled.append((thread_handle, run_handle))

    async def list_messages(self, thread_handle: str) -> list[ThreadMessage]:
        return list(self.messages)


def lead_tool_call(call_id: str = "call_1", arguments: Optional[str] = None) -> ToolCall:
    """Build a send_qualified_lead tool call."""
    if arguments is None:
        arguments = (
            '{"fullName": "Jane Doe", "phone": "+15550002222", '
            '"city": "Los Angeles", "legalConcern": "Rear-ended on the 405"}'
        )
    return ToolCall(id=call_id, function_name="send_qualified_lead", arguments=arguments)


def requires_action(*tool_calls: ToolCall) -> RunStatus:
    """Build a requires_action status carrying tool calls."""
    return RunStatus(run_id="run_1", status="requires_action", required_tool_calls=list(tool_calls))

"""Tool call dispatch use case."""

import json
from typing import Awaitable, Callable

from sms_relay.application.dtos.lead import LeadRecord
from sms_relay.application.dtos.run import ToolCall, ToolOutput
from sms_relay.application.use_cases.notify_qualified_lead import NotifyQualifiedLead

SEND_QUALIFIED_LEAD = "send_qualified_lead"

LEAD_SENT_OUTPUT = (
    "Lead information has been successfully sent to the law firm. "
    "Thank you for providing all the necessary details!"
)
LEAD_FAILED_OUTPUT = "There was an error sending the lead information. Please try again."
UNKNOWN_FUNCTION_OUTPUT = "Unknown function called."


class DispatchToolCall:
    """Route assistant function calls to local handlers.

    Every call yields a ToolOutput: the assistant expects one output per
    requested call, so failures are reported in the output text.
    """

    def __init__(self, lead_notifier: NotifyQualifiedLead) -> None:
        """
        Initialize dispatcher.

        Args:
            lead_notifier: Handler for send_qualified_lead
        """
        self._lead_notifier = lead_notifier
        self._handlers: dict[str, Callable[[ToolCall], Awaitable[ToolOutput]]] = {
            SEND_QUALIFIED_LEAD: self._send_qualified_lead,
        }

    @property
    def function_names(self) -> list[str]:
        """Registered function names."""
        return list(self._handlers)

    async def dispatch(self, tool_call: ToolCall) -> ToolOutput:
        """
        Execute a tool call.

        Args:
            tool_call: Function call requested by the assistant

        Returns:
            Tool output for the call (never raises)
        """
        handler = self._handlers.get(tool_call.function_name)
        if handler is None:
            return ToolOutput(
                tool_call_id=tool_call.id,
                output=UNKNOWN_FUNCTION_OUTPUT,
                ok=False,
                error=f"No handler registered for {tool_call.function_name!r}",
            )
        return await handler(tool_call)

    async def _send_qualified_lead(self, tool_call: ToolCall) -> ToolOutput:
        try:
            lead = LeadRecord.model_validate(json.loads(tool_call.arguments))
            await self._lead_notifier.notify(lead)
        except Exception as e:
            # Malformed arguments and delivery failures alike
            return ToolOutput(
                tool_call_id=tool_call.id,
                output=LEAD_FAILED_OUTPUT,
                ok=False,
                error=str(e),
            )
        return ToolOutput(tool_call_id=tool_call.id, output=LEAD_SENT_OUTPUT)

"""OpenAI Assistants backend adapter."""

from typing import Any, Optional

from openai import AsyncOpenAI, OpenAIError

from sms_relay.application.dtos.run import RunStatus, ThreadMessage, ToolCall, ToolOutput
from sms_relay.application.ports.assistant_backend import AssistantBackend
from sms_relay.domain.errors import AssistantBackendError
from sms_relay.infrastructure.config.settings import settings


def _to_run_status(run: Any) -> RunStatus:
    """Map an SDK run object onto the RunStatus DTO."""
    tool_calls: list[ToolCall] = []
    required_action = getattr(run, "required_action", None)
    if required_action is not None and required_action.submit_tool_outputs is not None:
        tool_calls = [
            ToolCall(
                id=call.id,
                function_name=call.function.name,
                arguments=call.function.arguments or "{}",
            )
            for call in required_action.submit_tool_outputs.tool_calls
        ]

    last_error: Optional[str] = None
    if getattr(run, "last_error", None) is not None:
        last_error = f"{run.last_error.code}: {run.last_error.message}"

    return RunStatus(
        run_id=run.id,
        status=run.status,
        required_tool_calls=tool_calls,
        last_error=last_error,
    )


def _first_text(message: Any) -> str:
    """Return the first text part of an SDK message, or an empty string."""
    for part in message.content or []:
        if getattr(part, "type", None) == "text":
            return part.text.value
    return ""


class OpenAIAssistantBackend(AssistantBackend):
    """Assistant backend implementation using the OpenAI Assistants API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        """
        Initialize OpenAI assistant backend.

        Args:
            api_key: OpenAI API key (defaults to settings.openai_api_key)
            timeout_seconds: Request timeout (defaults to settings.openai_timeout_seconds)
            client: Preconfigured AsyncOpenAI client (skips construction)
        """
        if client is not None:
            self._client = client
            return

        self._api_key = api_key or settings.openai_api_key
        self._timeout = timeout_seconds or settings.openai_timeout_seconds

        if not self._api_key:
            raise ValueError("OpenAI API key is required")

        self._client = AsyncOpenAI(
            api_key=self._api_key,
            timeout=self._timeout,
            max_retries=0,  # No retries, failures surface to the caller
        )

    async def create_thread(self) -> str:
        """Create an assistant thread and return its id."""
        try:
            thread = await self._client.beta.threads.create()
        except OpenAIError as e:
            raise AssistantBackendError(f"OpenAI thread creation failed: {e}") from e
        return thread.id

    async def post_message(self, thread_handle: str, role: str, content: str) -> None:
        """Append a message to a thread."""
        try:
            await self._client.beta.threads.messages.create(
                thread_id=thread_handle,
                role=role,
                content=content,
            )
        except OpenAIError as e:
            raise AssistantBackendError(f"OpenAI message creation failed: {e}") from e

    async def start_run(self, thread_handle: str, assistant_id: str) -> str:
        """Start a run for the given assistant and return its id."""
        try:
            run = await self._client.beta.threads.runs.create(
                thread_id=thread_handle,
                assistant_id=assistant_id,
            )
        except OpenAIError as e:
            raise AssistantBackendError(f"OpenAI run creation failed: {e}") from e
        return run.id

    async def get_run_status(self, thread_handle: str, run_handle: str) -> RunStatus:
        """Retrieve a run and map it onto RunStatus."""
        try:
            run = await self._client.beta.threads.runs.retrieve(
                run_id=run_handle,
                thread_id=thread_handle,
            )
        except OpenAIError as e:
            raise AssistantBackendError(f"OpenAI run retrieval failed: {e}") from e
        return _to_run_status(run)

    async def submit_tool_outputs(
        self,
        thread_handle: str,
        run_handle: str,
        outputs: list[ToolOutput],
    ) -> None:
        """Submit tool outputs as a single batch."""
        try:
            await self._client.beta.threads.runs.submit_tool_outputs(
                run_id=run_handle,
                thread_id=thread_handle,
                tool_outputs=[
                    {"tool_call_id": output.tool_call_id, "output": output.output}
                    for output in outputs
                ],
            )
        except OpenAIError as e:
            raise AssistantBackendError(f"OpenAI tool output submission failed: {e}") from e

    async def cancel_run(self, thread_handle: str, run_handle: str) -> None:
        """Cancel an active run so the thread accepts new messages."""
        try:
            await self._client.beta.threads.runs.cancel(
                run_id=run_handle,
                thread_id=thread_handle,
            )
        except OpenAIError as e:
            raise AssistantBackendError(f"OpenAI run cancellation failed: {e}") from e

    async def list_messages(self, thread_handle: str) -> list[ThreadMessage]:
        """List thread messages, newest first."""
        try:
            page = await self._client.beta.threads.messages.list(
                thread_id=thread_handle,
                order="desc",
            )
        except OpenAIError as e:
            raise AssistantBackendError(f"OpenAI message listing failed: {e}") from e
        return [
            ThreadMessage(role=message.role, content=_first_text(message))
            for message in page.data
        ]

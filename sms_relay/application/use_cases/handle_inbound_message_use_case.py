"""Handle inbound message use case."""

import asyncio
import logging
from typing import Any, Callable, Optional
from uuid import uuid4

from sms_relay.application.dtos.run import COMPLETED, REQUIRES_ACTION, TIMED_OUT, RunStatus
from sms_relay.application.dtos.sms import ReplyOutcome
from sms_relay.application.ports.assistant_backend import AssistantBackend
from sms_relay.application.ports.messaging_client import MessagingClient
from sms_relay.application.ports.session_store import SessionStore
from sms_relay.application.use_cases.dispatch_tool_call import DispatchToolCall

FALLBACK_REPLY = "I'm having trouble processing your request right now. Please try again."


class HandleInboundMessageUseCase:
    """Relay one inbound SMS through the assistant and text back its reply.

    Per message the flow is: resolve the session (creating its assistant
    thread on first contact), post the text, start a run, poll it until it
    leaves the active states, answer at most one round of tool calls, then
    read the latest assistant message and send it to the sender.

    Polling is bounded by ``max_polls`` status checks per wait. A run that is
    still active after that is cancelled, reported with the local status
    ``timed_out``, and the sender gets the fallback reply.
    """

    def __init__(
        self,
        session_store: SessionStore,
        assistant_backend: AssistantBackend,
        messaging_client: MessagingClient,
        tool_dispatcher: DispatchToolCall,
        assistant_id: str,
        poll_interval_seconds: float = 1.0,
        max_polls: int = 120,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize use case with dependencies.

        Args:
            session_store: Conversation session store
            assistant_backend: Thread/run assistant backend
            messaging_client: Outbound SMS port
            tool_dispatcher: Handler for assistant tool calls
            assistant_id: Assistant configuration identifier used for runs
            poll_interval_seconds: Delay between run status checks
            max_polls: Maximum status checks per wait before giving up
            logger: Optional structured logger function (log_turn signature)
        """
        if max_polls < 1:
            raise ValueError("max_polls must be at least 1")

        self._session_store = session_store
        self._assistant_backend = assistant_backend
        self._messaging_client = messaging_client
        self._tool_dispatcher = tool_dispatcher
        self._assistant_id = assistant_id
        self._poll_interval_seconds = poll_interval_seconds
        self._max_polls = max_polls
        self._logger = logger

    def _log(self, conversation_id: str, turn_id: str, component: str, **kwargs: Any) -> None:
        if self._logger:
            self._logger(conversation_id, turn_id, component, **kwargs)

    async def execute(
        self,
        conversation_id: str,
        text: str,
        turn_id: Optional[str] = None,
    ) -> ReplyOutcome:
        """
        Relay an inbound message and send the assistant's reply.

        Args:
            conversation_id: Sender phone number
            text: Inbound message text
            turn_id: Optional turn identifier for log correlation

        Returns:
            Reply outcome with the reply text and outbound message id

        Raises:
            Exception: Any backend or messaging failure, unchanged
        """
        if turn_id is None:
            turn_id = str(uuid4())

        thread_handle = await self._resolve_thread_handle(conversation_id, turn_id)

        await self._assistant_backend.post_message(thread_handle, "user", text)
        run_handle = await self._assistant_backend.start_run(thread_handle, self._assistant_id)
        self._log(conversation_id, turn_id, "driver", event="run_started", run_id=run_handle)

        run = await self._wait_for_run(conversation_id, turn_id, thread_handle, run_handle)

        if run.status == REQUIRES_ACTION:
            await self._submit_tool_outputs(conversation_id, turn_id, thread_handle, run)
            run = await self._wait_for_run(conversation_id, turn_id, thread_handle, run_handle)

        if run.status == COMPLETED:
            reply = await self._latest_assistant_reply(thread_handle)
        else:
            self._log(
                conversation_id,
                turn_id,
                "driver",
                level=logging.ERROR,
                event="run_failed",
                run_id=run.run_id,
                run_status=run.status,
                last_error=run.last_error,
            )
            reply = FALLBACK_REPLY

        message_id = await self._messaging_client.send(reply, to=conversation_id)
        self._log(
            conversation_id,
            turn_id,
            "driver",
            event="reply_sent",
            message_id=message_id,
            reply_length=len(reply),
        )

        return ReplyOutcome(
            success=True,
            message=reply,
            message_id=message_id,
            run_status=run.status,
        )

    async def _resolve_thread_handle(self, conversation_id: str, turn_id: str) -> str:
        # Held across the create_thread await so concurrent first messages
        # from one sender share a single thread.
        async with self._session_store.lock(conversation_id):
            session = await self._session_store.get_or_create(conversation_id)
            if session.thread_handle is not None:
                return session.thread_handle

            created = await self._assistant_backend.create_thread()
            thread_handle = await self._session_store.assign_thread_handle(
                conversation_id, created
            )
            self._log(
                conversation_id, turn_id, "driver", event="thread_created", thread=thread_handle
            )
            return thread_handle

    async def _wait_for_run(
        self,
        conversation_id: str,
        turn_id: str,
        thread_handle: str,
        run_handle: str,
    ) -> RunStatus:
        run = await self._assistant_backend.get_run_status(thread_handle, run_handle)
        polls = 1
        while run.is_active:
            if polls >= self._max_polls:
                self._log(
                    conversation_id,
                    turn_id,
                    "driver",
                    level=logging.WARNING,
                    event="poll_limit_reached",
                    run_id=run_handle,
                    run_status=run.status,
                    polls=polls,
                )
                await self._cancel_run(conversation_id, turn_id, thread_handle, run_handle)
                return RunStatus(
                    run_id=run_handle,
                    status=TIMED_OUT,
                    last_error=f"run still {run.status} after {polls} status checks",
                )
            await asyncio.sleep(self._poll_interval_seconds)
            run = await self._assistant_backend.get_run_status(thread_handle, run_handle)
            polls += 1

        self._log(
            conversation_id,
            turn_id,
            "driver",
            event="run_settled",
            run_id=run_handle,
            run_status=run.status,
            polls=polls,
        )
        return run

    async def _cancel_run(
        self,
        conversation_id: str,
        turn_id: str,
        thread_handle: str,
        run_handle: str,
    ) -> None:
        # A thread with an active run rejects new messages until the run ends.
        try:
            await self._assistant_backend.cancel_run(thread_handle, run_handle)
        except Exception as e:
            self._log(
                conversation_id,
                turn_id,
                "driver",
                level=logging.WARNING,
                event="run_cancel_failed",
                run_id=run_handle,
                error=str(e),
            )
            return
        self._log(conversation_id, turn_id, "driver", event="run_cancelled", run_id=run_handle)

    async def _submit_tool_outputs(
        self,
        conversation_id: str,
        turn_id: str,
        thread_handle: str,
        run: RunStatus,
    ) -> None:
        outputs = []
        for tool_call in run.required_tool_calls:
            output = await self._tool_dispatcher.dispatch(tool_call)
            self._log(
                conversation_id,
                turn_id,
                "tools",
                level=logging.INFO if output.ok else logging.WARNING,
                function_name=tool_call.function_name,
                tool_call_id=tool_call.id,
                ok=output.ok,
                error=output.error,
            )
            outputs.append(output)

        await self._assistant_backend.submit_tool_outputs(thread_handle, run.run_id, outputs)

    async def _latest_assistant_reply(self, thread_handle: str) -> str:
        messages = await self._assistant_backend.list_messages(thread_handle)
        if messages and messages[0].role == "assistant":
            return messages[0].content
        return ""

"""Assistant backend port."""

from abc import ABC, abstractmethod

from sms_relay.application.dtos.run import RunStatus, ThreadMessage, ToolOutput


class AssistantBackend(ABC):
    """Port interface for a thread/run based assistant backend."""

    @abstractmethod
    async def create_thread(self) -> str:
        """
        Create a conversation thread.

        Returns:
            Thread handle
        """
        pass

    @abstractmethod
    async def post_message(self, thread_handle: str, role: str, content: str) -> None:
        """
        Append a message to a thread.

        Args:
            thread_handle: Thread handle
            role: Message role (e.g., 'user')
            content: Message text
        """
        pass

    @abstractmethod
    async def start_run(self, thread_handle: str, assistant_id: str) -> str:
        """
        Start an assistant run on a thread.

        Args:
            thread_handle: Thread handle
            assistant_id: Assistant configuration identifier

        Returns:
            Run handle
        """
        pass

    @abstractmethod
    async def get_run_status(self, thread_handle: str, run_handle: str) -> RunStatus:
        """
        Fetch the current status of a run.

        Args:
            thread_handle: Thread handle
            run_handle: Run handle

        Returns:
            Run status snapshot, including requested tool calls if any
        """
        pass

    @abstractmethod
    async def submit_tool_outputs(
        self,
        thread_handle: str,
        run_handle: str,
        outputs: list[ToolOutput],
    ) -> None:
        """
        Submit tool outputs for a run waiting on them.

        Args:
            thread_handle: Thread handle
            run_handle: Run handle
            outputs: One output per requested tool call
        """
        pass

    @abstractmethod
    async def cancel_run(self, thread_handle: str, run_handle: str) -> None:
        """
        Cancel a run that is still active.

        Args:
            thread_handle: Thread handle
            run_handle: Run handle
        """
        pass

    @abstractmethod
    async def list_messages(self, thread_handle: str) -> list[ThreadMessage]:
        """
        List thread messages, latest first.

        Args:
            thread_handle: Thread handle

        Returns:
            Messages ordered newest to oldest
        """
        pass

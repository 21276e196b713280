from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage


class LLMProvider(ABC):
    """A model server that turns a conversation into one reply.

    Providers own their HTTP client, the request body layout and the
    framing of the response stream. Callers only see ``generate``.

    Use as an async context manager so the client is released:
        async with provider:
            reply = await provider.generate(messages)
    """

    def __init__(self) -> None:
        self._debug_callback: Any | None = None

    @property
    @abstractmethod
    def model(self) -> str:
        """Name of the model requests are addressed to."""

    @abstractmethod
    async def generate(self, messages: list[ChatMessage]) -> str:
        """Send the conversation and wait for the complete reply.

        Args:
            messages: Conversation history, oldest first

        Returns:
            The full accumulated reply text

        Raises:
            ChatClientError: Encoding, transport or stream failures
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the underlying HTTP client."""

    def set_debug_callback(self, callback: Any) -> None:
        """Route request tracing to ``callback(level, component, message)``.

        ``level`` is one of debug/info/warning/error.
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        # httpx can fail to close after asyncio.run has torn the loop down
        # (https://github.com/encode/httpx/issues/914)
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise

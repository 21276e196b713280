"""Turn sequencing for a chat session.

Hides how one user submission becomes one request and one reply:
- the single-outstanding-request rule
- which projection of the conversation is sent
- when the hidden seed preamble stops being sent

Presentation layers drive a turn either in one call (``run_turn``) or in
three steps (``begin_turn``, ``request``, ``complete_turn``/``fail_turn``)
when the request runs in a background worker. In the stepped form only the
owner of the controller should call the begin/complete/fail methods.
"""

from typing import Any

from ..conversation import Conversation, PendingRequest
from ..llm.base import LLMProvider
from ..llm.errors import RequestPendingError
from ..llm.models import ChatMessage, Role


class SessionController:
    """Sequences the turns of one conversation against one provider."""

    def __init__(
        self,
        llm: LLMProvider,
        conversation: Conversation | None = None,
        debug_callback: Any | None = None,
    ) -> None:
        self._llm = llm
        self._conversation = conversation if conversation is not None else Conversation()
        self._pending: PendingRequest | None = None
        self._debug_callback = debug_callback

    @property
    def conversation(self) -> Conversation:
        return self._conversation

    @property
    def pending(self) -> PendingRequest | None:
        """The request in flight, if any."""
        return self._pending

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    def begin_turn(self, text: str) -> PendingRequest | None:
        """Accept a user submission and open a pending request.

        Args:
            text: Raw user input

        Returns:
            The pending request to send, or None for blank input

        Raises:
            RequestPendingError: If the previous turn has not resolved yet
        """
        text = text.strip()
        if not text:
            return None

        if self._pending is not None:
            raise RequestPendingError("A request is already in progress")

        self._conversation.append(ChatMessage(role=Role.USER, content=text))
        self._pending = PendingRequest(messages=tuple(self._conversation.send_view()))
        self._debug(
            "info", "Session",
            f"Turn started with {len(self._pending.messages)} message(s) in request"
        )
        return self._pending

    async def request(self, pending: PendingRequest) -> str:
        """Send a pending request and wait for the full reply."""
        return await self._llm.generate(list(pending.messages))

    def complete_turn(self, reply: str) -> ChatMessage:
        """Record the reply to the pending request.

        Raises:
            RuntimeError: If no request is pending
        """
        if self._pending is None:
            raise RuntimeError("No request is pending")

        message = ChatMessage(role=Role.ASSISTANT, content=reply)
        self._conversation.append(message)
        self._conversation.mark_seed_delivered()
        self._pending = None
        self._debug("info", "Session", f"Turn completed ({len(reply)} characters)")
        return message

    def fail_turn(self, error: BaseException) -> None:
        """Drop the pending request after a failure.

        The user message stays in the history. An undelivered seed is sent
        again with the next turn.
        """
        self._pending = None
        self._debug("info", "Session", f"Turn failed: {error}")

    async def run_turn(self, text: str) -> ChatMessage | None:
        """Run one complete turn.

        Args:
            text: Raw user input

        Returns:
            The assistant message, or None for blank input

        Raises:
            RequestPendingError: If another turn is in flight
            ChatClientError: If the request fails (the turn is closed first,
                as it is for any other exception)
        """
        pending = self.begin_turn(text)
        if pending is None:
            return None

        try:
            reply = await self.request(pending)
        except BaseException as e:
            self.fail_turn(e)
            raise

        return self.complete_turn(reply)


async def ask(llm: LLMProvider, prompt: str, seed_content: str | None = None) -> str:
    """Single-turn mode: one question about optional seed content.

    Args:
        llm: Provider to send the request to
        prompt: The question
        seed_content: Piped text to analyze, or None

    Returns:
        The raw reply text
    """
    conversation = Conversation.with_seed_content(seed_content)
    conversation.append(ChatMessage(role=Role.USER, content=prompt))
    return await llm.generate(conversation.send_view())

"""Data models for the conversation store.

The conversation keeps two projections of one history:
- render view: what the user typed and what the model answered
- send view: what goes to the model, which additionally carries the
  hidden seed preamble until the first turn has been answered
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..llm.models import ChatMessage, Role

SEED_HEADER = "Content to analyze:\n"


def seed_message(content: str) -> ChatMessage:
    """Wrap piped content as the preamble message."""
    return ChatMessage(role=Role.USER, content=f"{SEED_HEADER}{content}")


class PendingRequest(BaseModel):
    """Snapshot of the single request currently in flight."""

    model_config = ConfigDict(frozen=True)

    messages: tuple[ChatMessage, ...] = Field(description="Send view at submission time")
    issued_at: datetime = Field(default_factory=datetime.now)


class Conversation(BaseModel):
    """Ordered, append-only chat history of one session.

    Grows without bound; nothing is evicted or truncated.
    """

    seed: ChatMessage | None = Field(default=None, description="Hidden preamble carrying seed content")
    messages: list[ChatMessage] = Field(default_factory=list)
    seed_delivered: bool = Field(default=False, description="Whether a turn carrying the seed has completed")

    @classmethod
    def with_seed_content(cls, content: str | None) -> "Conversation":
        """Create a conversation, optionally preloaded with seed content.

        Args:
            content: Piped text to analyze, or None

        Returns:
            New conversation whose first request will carry the content
        """
        if content is None:
            return cls()
        return cls(seed=seed_message(content))

    def append(self, message: ChatMessage) -> None:
        """Add a message to the end of the history."""
        self.messages.append(message)

    def mark_seed_delivered(self) -> None:
        """Record that the seed preamble reached the model with a completed turn."""
        if self.seed is not None:
            self.seed_delivered = True

    def render_view(self) -> list[ChatMessage]:
        """Messages to display, without the hidden preamble."""
        return list(self.messages)

    def send_view(self) -> list[ChatMessage]:
        """Messages to send to the model.

        Until the first turn completes this is the seed followed by the
        visible messages; afterwards it equals the render view.
        """
        if self.seed is not None and not self.seed_delivered:
            return [self.seed, *self.messages]
        return list(self.messages)

    def last_reply(self) -> ChatMessage | None:
        """Get the most recent assistant message."""
        for msg in reversed(self.messages):
            if msg.role == Role.ASSISTANT:
                return msg
        return None

    def __len__(self) -> int:
        return len(self.messages)

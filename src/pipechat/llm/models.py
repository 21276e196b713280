from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Role of a message sender."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel):
    """Represents a chat message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Role of the message sender: 'user', 'assistant', or 'system'")
    content: str = Field(description="Content of the message")


class StreamRecord(BaseModel):
    """One decoded line of a streamed ``/api/generate`` response.

    Only ``response`` and ``done`` drive accumulation. The counters are
    present on the final record Ollama sends and are kept for logging.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    fragment: str = Field(default="", alias="response", description="Partial response text")
    is_final: bool = Field(default=False, alias="done", description="Whether this record ends the stream")
    model: str | None = Field(default=None, description="Model that produced the record")
    prompt_eval_count: int | None = Field(default=None, description="Prompt tokens evaluated")
    eval_count: int | None = Field(default=None, description="Tokens generated")
    total_duration: int | None = Field(default=None, description="Total generation time in nanoseconds")

    @property
    def usage(self) -> dict[str, int] | None:
        """Token usage, when the record carries it."""
        if self.prompt_eval_count is None and self.eval_count is None:
            return None
        prompt_tokens = self.prompt_eval_count or 0
        completion_tokens = self.eval_count or 0
        return {
            "prompt_tokens": prompt_tokens,
            "completion_tokens": completion_tokens,
            "total_tokens": prompt_tokens + completion_tokens,
        }


class GenerateRequest(BaseModel):
    """JSON body of a ``POST /api/generate`` call."""

    model_config = ConfigDict(frozen=True)

    model: str = Field(description="Model identifier")
    prompt: str = Field(description="Flattened conversation prompt")
    stream: bool = Field(default=True, description="Request newline-delimited streamed delivery")

    def to_payload(self) -> dict[str, Any]:
        """Get the request body as a plain dict."""
        return self.model_dump()

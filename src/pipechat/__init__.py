"""
pipechat: a terminal chat client for a locally hosted Ollama server.

Piped text becomes the content to analyze; the model's streamed reply is
decoded line by line and shown either as a single answer or as an ongoing
conversation.
"""

__version__ = "0.1.0"

from .conversation import Conversation, PendingRequest
from .llm import (
    ChatClientError,
    ChatMessage,
    LLMProvider,
    OllamaProvider,
    Role,
    accumulate_stream,
    create_llm_provider,
    flatten_messages,
)
from .session import SessionController, ask

__all__ = [
    "ChatClientError",
    "ChatMessage",
    "Conversation",
    "LLMProvider",
    "OllamaProvider",
    "PendingRequest",
    "Role",
    "SessionController",
    "accumulate_stream",
    "ask",
    "create_llm_provider",
    "flatten_messages",
]

from .base import LLMProvider
from .decoder import accumulate_stream, parse_record
from .errors import (
    ChatClientError,
    RequestEncodingError,
    RequestPendingError,
    StreamDecodeError,
    TransportError,
)
from .factory import create_llm_provider
from .models import ChatMessage, GenerateRequest, Role, StreamRecord
from .prompt import flatten_messages
from .providers import OllamaProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "accumulate_stream",
    "parse_record",
    "flatten_messages",
    "ChatMessage",
    "GenerateRequest",
    "Role",
    "StreamRecord",
    "ChatClientError",
    "RequestEncodingError",
    "RequestPendingError",
    "StreamDecodeError",
    "TransportError",
    "OllamaProvider",
]

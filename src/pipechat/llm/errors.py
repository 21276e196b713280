"""Exceptions raised while talking to the model server.

Every failure of a single turn is a ``ChatClientError`` so presentation code
can report it with one handler. None of them are retried.
"""


class ChatClientError(Exception):
    """Base class for chat client failures."""


class RequestEncodingError(ChatClientError):
    """The request body could not be serialized to JSON."""


class TransportError(ChatClientError):
    """The HTTP request failed or the response stream broke off."""


class StreamDecodeError(ChatClientError):
    """A response line is not a valid stream record.

    The decoder reports and skips these; it never lets them end a turn.
    """

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"Error parsing chunk: {reason}")
        self.line = line
        self.reason = reason


class RequestPendingError(ChatClientError):
    """A new turn was submitted while the previous one is still in flight."""

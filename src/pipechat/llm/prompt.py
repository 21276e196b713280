from collections.abc import Iterable

from .models import ChatMessage


def flatten_messages(messages: Iterable[ChatMessage]) -> str:
    """Flatten a conversation into the single prompt string the server expects.

    Each message becomes ``"<role>: <content>\\n"`` in conversation order.

    Example:
        >>> flatten_messages([
        ...     ChatMessage(role="user", content="a"),
        ...     ChatMessage(role="assistant", content="b"),
        ... ])
        'user: a\\nassistant: b\\n'
    """
    return "".join(f"{msg.role.value}: {msg.content}\n" for msg in messages)

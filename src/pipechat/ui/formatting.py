"""Text formatting utilities shared by the line-mode and full-screen views.

Hides how transcript entries are styled: speaker labels, timestamps and the
pending indicator line.
"""

from collections.abc import Iterable
from datetime import datetime

from rich.text import Text

from ..conversation import Conversation
from ..llm.models import ChatMessage
from .config import (
    BOT_LABEL,
    CHAT_TIMESTAMP_FORMAT,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    THINKING_TEXT,
    USER_LABEL,
)
from .models import ChatEntry

USER_STYLE = "bold bright_white"
BOT_STYLE = "bold bright_cyan"
TIMESTAMP_STYLE = "grey35"
SUBTLE_STYLE = "grey39"
ERROR_STYLE = "bold red"

LEVEL_STYLES = {
    "debug": "dim white",
    "info": "cyan",
    "warning": "yellow",
    "error": "red",
}

COMPONENT_STYLES = {
    "LLM": "magenta",
    "Stream": "yellow",
    "Session": "green",
    "TUI": "cyan",
}


def format_timestamp(timestamp: datetime | None = None) -> str:
    """Format a transcript timestamp (HH:MM)."""
    return (timestamp or datetime.now()).strftime(CHAT_TIMESTAMP_FORMAT)


def speaker_label(role: str) -> Text:
    """Styled speaker label for a role."""
    if role == "user":
        return Text(USER_LABEL, style=USER_STYLE)
    if role == "error":
        return Text("<error>", style=ERROR_STYLE)
    if role == "system":
        return Text("<system>", style=SUBTLE_STYLE)
    return Text(BOT_LABEL, style=BOT_STYLE)


def format_header(role: str, timestamp: datetime | None = None) -> Text:
    """Timestamp plus speaker label, e.g. ``15:04 <you>``."""
    header = Text(format_timestamp(timestamp), style=TIMESTAMP_STYLE)
    header.append(" ")
    header.append_text(speaker_label(role))
    return header


def format_entry(entry: ChatEntry) -> Text:
    """Render one transcript line.

    Message content is never parsed as markup.
    """
    line = format_header(entry.role, entry.timestamp)
    line.append(" ")
    if entry.role == "error":
        line.append(entry.content, style="red")
    elif entry.role == "system":
        line.append(entry.content, style=SUBTLE_STYLE)
    else:
        line.append(entry.content)
    return line


def format_thinking(timestamp: datetime | None = None, frame: str = "") -> Text:
    """The pending indicator line."""
    line = format_header("assistant", timestamp)
    line.append(" ")
    if frame:
        line.append(f"{frame} ", style=BOT_STYLE)
    line.append(THINKING_TEXT, style=SUBTLE_STYLE)
    return line


def entries_from_messages(messages: Iterable[ChatMessage]) -> list[ChatEntry]:
    """Convert conversation messages to displayable entries."""
    return [ChatEntry(role=msg.role.value, content=msg.content) for msg in messages]


def render_transcript(
    conversation: Conversation,
    pending: bool = False,
    now: datetime | None = None,
    start: int = 0,
) -> Text:
    """Render the visible conversation, with the pending line when a request is in flight.

    The hidden seed preamble is never shown.

    Args:
        conversation: Conversation to render
        pending: Whether a request is outstanding
        now: Timestamp for the pending line
        start: Index of the first visible message to render, so a
            scrolling view can print only what it has not shown yet

    Returns:
        Styled multi-line text
    """
    lines = [format_entry(entry) for entry in entries_from_messages(conversation.render_view()[start:])]
    if pending:
        lines.append(format_thinking(now))
    return Text("\n").join(lines)


def describe_seed(content: str) -> str:
    """Summary line shown when seed content was loaded."""
    return f"Content loaded: {len(content.splitlines())} lines, {len(content)} characters"


def format_log_line(level: str, component: str, message: str, timestamp: datetime | None = None) -> Text:
    """One trace line: ``HH:MM:SS LEVEL   [Component] message``."""
    if len(message) > LOG_MAX_MESSAGE_LENGTH:
        message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."
    return Text.assemble(
        ((timestamp or datetime.now()).strftime(LOG_TIMESTAMP_FORMAT), "dim"),
        " ",
        (f"{level.upper():<7}", LEVEL_STYLES.get(level, "white")),
        " ",
        (f"[{component}]", COMPONENT_STYLES.get(component, "bold")),
        " ",
        message,
    )
